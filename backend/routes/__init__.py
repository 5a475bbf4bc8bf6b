# routes/__init__.py
"""
Blueprint registration helper
"""

def register_blueprints(app):
    """Register all application blueprints"""
    from routes.auth import auth_bp
    from routes.tracks import tracks_bp
    from routes.health import health_bp
    from routes.api_docs import api_docs_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(tracks_bp)
    app.register_blueprint(health_bp)
    app.register_blueprint(api_docs_bp)
