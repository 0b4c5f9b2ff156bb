"""Entry point for the PDF merge/split HTTP service."""

import logging
import sys

from .config import get_config
from .http_server import run_server

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main():
    """Main entry point."""
    config = get_config()

    logger.info("=" * 60)
    logger.info("PDF Merge & Split Service")
    logger.info("=" * 60)
    logger.info(f"Canvas paper size: {config.assembly.paper_size}")
    logger.info(f"Max merge files: {config.assembly.max_merge_files}")
    logger.info(f"Max file size: {config.assembly.max_file_size_mb}MB")

    try:
        run_server()
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")
    except Exception as e:
        logger.error(f"Server error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
