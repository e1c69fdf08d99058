import logging

import uvicorn

from config import ServerConfig

if __name__ == "__main__":
    cfg = ServerConfig.from_env()
    logging.basicConfig(
        level=cfg.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("app:app", host=cfg.host, port=cfg.port, log_level=cfg.log_level, reload=False)
