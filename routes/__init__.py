"""routes 패키지 - Blueprint 중앙 등록"""


def register_blueprints(app):
    from routes.auth import auth_bp
    from routes.contact import contact_bp
    from routes.campaign import campaign_bp
    from routes.admin import admin_bp
    from routes.users import users_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(contact_bp)
    app.register_blueprint(campaign_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(users_bp)
