import logging
import os
from datetime import date, datetime

from bson import ObjectId
from flask import Flask
from flask.json.provider import DefaultJSONProvider
from flask_jwt_extended import JWTManager

import config
from errors import register_error_handlers
from models import db
from routes.auth_routes import auth_bp
from routes.comment_routes import comment_bp
from routes.movie_routes import movie_bp
from routes.theater_routes import theater_bp


class DocumentJSONProvider(DefaultJSONProvider):
    """Serialize store documents: ObjectIds as hex strings, datetimes as ISO-8601."""

    def default(self, o):
        if isinstance(o, ObjectId):
            return str(o)
        if isinstance(o, (datetime, date)):
            return o.isoformat()
        return super().default(o)


def warn_insecure_defaults(app):
    level = logging.ERROR if app.config["PRODUCTION"] else logging.WARNING
    for setting, (env_var, fallback) in config.INSECURE_DEFAULTS.items():
        if os.environ.get(env_var) is None and app.config.get(setting) == fallback:
            app.logger.log(
                level,
                "%s is using its built-in development value; set %s before deploying",
                setting,
                env_var,
            )
    if app.config["JWT_SECRET_KEY"] == app.config["JWT_REFRESH_SECRET_KEY"]:
        app.logger.log(level, "Access and refresh tokens share one signing key")


logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

app = Flask(__name__)
app.json_provider_class = DocumentJSONProvider
app.json = DocumentJSONProvider(app)
app.config.from_object(config)

db.init_app(app)

jwt = JWTManager(app)
app.register_blueprint(auth_bp)
app.register_blueprint(movie_bp)
app.register_blueprint(theater_bp)
app.register_blueprint(comment_bp)
register_error_handlers(app)
warn_insecure_defaults(app)


if __name__ == '__main__':
    app.run(debug=not app.config["PRODUCTION"])
