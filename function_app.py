import os
import logging
import azure.functions as func

from src.function_blueprints.http_add_logo import bp as add_logo_bp
from src.function_blueprints.http_generate_image import bp as generate_image_bp
from src.function_blueprints.http_health import bp as health_bp

app = func.FunctionApp(http_auth_level=func.AuthLevel.FUNCTION)


def _configure_logging() -> None:
    lvl = (os.getenv("AZURE_SDK_LOG_LEVEL") or "").upper()
    if lvl:
        level = getattr(logging, lvl, logging.INFO)
        logging.getLogger("azure").setLevel(level)
    app_level = (os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.getLogger("socialpost").setLevel(getattr(logging, app_level, logging.INFO))
    # PIL logs every plugin probe at DEBUG
    logging.getLogger("PIL").setLevel(logging.INFO)


_configure_logging()

app.register_functions(add_logo_bp)
app.register_functions(generate_image_bp)
app.register_functions(health_bp)
