from flask import Flask, jsonify
from lendtrack.config import Config
from lendtrack.extensions import db, migrate, jwt
from lendtrack.utils.errors import LendTrackError, error_response


def create_app(config_object=None):
    app = Flask(__name__)
    app.config.from_object(config_object or Config)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    # models must be imported before create_all / migrations see them
    from lendtrack.models import equipment, loan, consultation, user  # noqa: F401

    from lendtrack.controllers.auth_controller import auth_bp
    from lendtrack.controllers.loan_controller import loan_bp
    from lendtrack.controllers.dashboard_controller import dashboard_bp
    from lendtrack.controllers.equipment_controller import equipment_bp
    from lendtrack.controllers.consultation_controller import consultation_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(loan_bp, url_prefix="/loans")
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(equipment_bp, url_prefix="/equipment")
    app.register_blueprint(consultation_bp, url_prefix="/consultations")

    # errors raised before a view's own try block (e.g. a non-object JSON body)
    app.register_error_handler(LendTrackError, error_response)

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    app.logger.info(
        f"[lendtrack] App created (equipment mode: {app.config['EQUIPMENT_TRACKING_MODE']})."
    )
    return app
