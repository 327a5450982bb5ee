"""
CLI commands for dirmirror.
"""
