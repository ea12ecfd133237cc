from __future__ import annotations

import uvicorn

from playlist_sorter import create_app
from playlist_sorter.config import AppConfig


def main() -> None:
    config = AppConfig()
    app = create_app(config)
    uvicorn.run(app, host=config.host, port=config.port, log_config=None)


if __name__ == "__main__":
    main()
