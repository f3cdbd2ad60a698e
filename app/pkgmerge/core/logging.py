"""Logging setup for the pkgmerge CLI."""

import logging


def configure_logging(*, verbose: bool = False, quiet: bool = False, force: bool = False) -> None:
    """Initialise the root logger once.

    Warnings are shown by default, debug output with ``verbose`` and only
    errors with ``quiet``. Pass ``force=True`` to reconfigure in tests.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
