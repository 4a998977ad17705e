"""
Mesh export helpers.
"""

from .mesh_export import export_obj, mesh_to_dict

__all__ = ['export_obj', 'mesh_to_dict']
