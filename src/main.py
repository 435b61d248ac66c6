import uvicorn

from src.core.app import create_app
from src.utils.config import config
from src.utils.logger import setup_logging, get_uvicorn_log_config

setup_logging()

# Create FastAPI app
app = create_app(config)


def main():
    """Run the FastAPI application with uvicorn"""
    uvicorn.run(
        "src.main:app",
        host=config.api_host,
        port=config.api_port,
        reload=config.debug,
        log_config=get_uvicorn_log_config(),
    )


if __name__ == "__main__":
    main()
