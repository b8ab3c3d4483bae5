"""
===============================================================================
APPLICATION LAYER
===============================================================================

  - usecases/: operaciones de negocio con resultados tipados.
  - dev_seed_admin: tarea de arranque que asegura un admin en desarrollo.
===============================================================================
"""
