# fittrack/__init__.py

from datetime import datetime, timezone

from flask import Flask, jsonify
from flask_cors import CORS
from flask_sqlalchemy import SQLAlchemy
from flask_jwt_extended import JWTManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from config import Config

db = SQLAlchemy()
jwt = JWTManager()
limiter = Limiter(key_func=get_remote_address)


def create_app(config_object=None, readiness=None):
    app = Flask(__name__)
    app.config.from_object(config_object or Config)

    # Init extensions
    db.init_app(app)
    jwt.init_app(app)
    limiter.init_app(app)

    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})

    from .errors import register_error_handlers
    from .readiness import DatabaseReadiness, init_readiness

    register_error_handlers(app)
    init_readiness(app, readiness or DatabaseReadiness(db))

    # -----------------------------
    # JWT callbacks
    # -----------------------------
    from .models.user import User

    @jwt.user_lookup_loader
    def user_lookup_callback(jwt_header, jwt_payload):
        try:
            user_id = int(jwt_payload["sub"])
        except (TypeError, ValueError):
            return None
        return db.session.get(User, user_id)

    @jwt.user_lookup_error_loader
    def user_lookup_error_callback(jwt_header, jwt_payload):
        return jsonify({"message": "Token is not valid"}), 401

    @jwt.unauthorized_loader
    def unauthorized_callback(reason):
        return (
            jsonify(
                {
                    "message": "No token, authorization denied",
                    "error": reason,
                }
            ),
            401,
        )

    @jwt.invalid_token_loader
    def invalid_token_callback(reason):
        return jsonify({"message": "Token is not valid", "error": reason}), 401

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({"message": "Token has expired"}), 401

    # -----------------------------
    # Blueprints
    # -----------------------------
    from .routes.auth_routes import auth_bp
    from .routes.workout_routes import workouts_bp
    from .routes.weight_routes import weight_bp
    from .routes.history_routes import history_bp

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(workouts_bp, url_prefix="/api/workouts")
    app.register_blueprint(weight_bp, url_prefix="/api/weight")
    app.register_blueprint(history_bp, url_prefix="/api/history")

    @app.route("/api/health")
    @limiter.exempt
    def health():
        ready = app.extensions["readiness"].is_ready()
        return {
            "message": "Server is running",
            "database": "connected" if ready else "disconnected",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    # -----------------------------
    # DB init
    # -----------------------------
    with app.app_context():
        db.create_all()

    return app
