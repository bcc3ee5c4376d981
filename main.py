from quotalink_app.app_factory import create_app
from quotalink_app.config import settings
from quotalink_app.logging_config import setup_logging

setup_logging(
    level=settings.log_level,
    log_file=settings.log_file,
    json_format=settings.log_json,
)

# Create FastAPI app
app = create_app()
