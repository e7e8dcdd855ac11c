"""
Web handlers, one module per area.
Each module exposes setup_routes(app, services, config, ...).
"""
