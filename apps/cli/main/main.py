from __future__ import annotations

import logging
import sys

from apps.cli.commands.tables import EXIT_USAGE, SubmitTablesCli, ValidateTablesCli


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    _configure_logging()
    args = argv if argv is not None else sys.argv[1:]

    if not args or args[0] not in ("validate", "submit"):
        print(
            "Usage:\n"
            "  validate <snapshot.yaml> [--config PATH]\n"
            "  submit <snapshot.yaml> [--config PATH]\n"
        )
        return EXIT_USAGE

    cmd = args[0]
    rest = args[1:]

    if cmd == "validate":
        return ValidateTablesCli().run(rest)
    return SubmitTablesCli().run(rest)


if __name__ == "__main__":
    raise SystemExit(main())
