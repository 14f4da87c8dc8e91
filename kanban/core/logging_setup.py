import logging


def setup_logging(level: str = "INFO") -> None:
    """Configure le logging du process (sans effet si des handlers existent déjà, ex. uvicorn)"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
