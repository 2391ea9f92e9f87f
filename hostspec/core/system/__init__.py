"""
System layer — host detection, strategy selection, and the per-run context.

Import from the submodules directly:

    from hostspec.core.system.context import System, new_system
    from hostspec.core.system.detection import detect_environment
"""
