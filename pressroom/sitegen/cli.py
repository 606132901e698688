"""
Command entry point: ``pressroom-generate`` / ``python -m pressroom.sitegen``.

Takes no flags. Configuration comes from the environment (see
pressroom.core.config.Config). Exits 0 on success and 1 on any failure.
"""

import logging
import sys

from ..core.config import Config
from ..core.logging_service import LoggingService
from ..core.store import BackendClient
from .generator import SiteGenerator


def run(store, config):
    """Generate the site; returns a process exit status."""
    try:
        report = SiteGenerator.from_config(store, config).generate()
    except Exception as e:
        LoggingService.log_error_with_traceback('sitegen', e)
        print(f"Generation failed: {e}", file=sys.stderr)
        return 1

    print(f"Static site generated: {report['post_count']} posts, "
          f"{len(report['files'])} files in {report['output_dir']}")
    return 0


def main():
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    config = Config.as_dict()
    try:
        store = BackendClient.from_config(config)
    except ValueError as e:
        print(f"Generation failed: {e}", file=sys.stderr)
        return 1
    return run(store, config)