"""Main entry point for Care Bot."""

import os

import uvicorn
from dotenv import load_dotenv

from carebot.config import PROJECT_ROOT


def main():
    """Run the application."""
    load_dotenv(PROJECT_ROOT / ".env")

    # Imported after .env is loaded so module-level settings see it
    from carebot.api import create_fastapi_app
    from carebot.api.routes import control
    from carebot.logging_config import setup_logging
    from sim import Sim

    setup_logging(log_level=os.getenv("LOG_LEVEL"))

    api_host = os.getenv("API_HOST", "localhost")
    api_port = int(os.getenv("API_PORT", "8000"))

    control.set_sim_instance(Sim(api_url=f"http://{api_host}:{api_port}"))

    uvicorn.run(
        create_fastapi_app(),
        host=api_host,
        port=api_port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
