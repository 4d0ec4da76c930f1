"""Run the jobfeed service with uvicorn."""
import uvicorn
from dotenv import load_dotenv

from .config.config import load_app_config


def main() -> None:
    load_dotenv()
    config = load_app_config()
    uvicorn.run("jobfeed.main:app", host=config.host, port=config.port)


if __name__ == "__main__":
    main()
