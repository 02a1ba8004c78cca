from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import DEFAULT_CFG_FILE, load_config, parse_scalar
from .engine import run_check, run_render
from .errors import NodeTplError
from .version import tool_version


def _setup_logging() -> None:
    logger = logging.getLogger("nodetpl")
    level = logging.DEBUG if os.environ.get("NODETPL_DEBUG") else logging.WARNING
    logger.setLevel(level)
    if not logger.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="nodetpl",
        description="Render node-tree templates described in YAML documents",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_render = sub.add_parser("render", help="Отрендерить документ в stdout")
    sp_render.add_argument("document", type=Path, help="YAML-документ с узлами")
    sp_render.add_argument(
        "--data",
        action="append",
        type=Path,
        default=[],
        metavar="FILE",
        help="YAML-файл с данными базовой области (можно указать несколько)",
    )
    sp_render.add_argument(
        "--set",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="переопределить переменную (значение разбирается как YAML-скаляр)",
    )
    sp_render.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"файл конфигурации (по умолчанию ./{DEFAULT_CFG_FILE})",
    )

    sp_check = sub.add_parser("check", help="Проверить документ без рендеринга (JSON)")
    sp_check.add_argument("document", type=Path, help="YAML-документ с узлами")

    return p


def _parse_overrides(items: List[str]) -> Dict[str, Any]:
    """Парсит список 'key=value' в словарь."""
    result: Dict[str, Any] = {}
    for item in items:
        if "=" not in item:
            raise ValueError(f"Invalid --set format '{item}'. Expected 'key=value'")
        key, value = item.split("=", 1)
        key = key.strip()
        if not key:
            raise ValueError(f"Invalid --set format '{item}': empty key")
        result[key] = parse_scalar(value)
    return result


def main(argv: Optional[List[str]] = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging()

    try:
        if ns.cmd == "render":
            cfg_path = ns.config if ns.config is not None else Path.cwd() / DEFAULT_CFG_FILE
            text = run_render(
                ns.document,
                data_paths=ns.data,
                overrides=_parse_overrides(ns.set),
                cfg=load_config(cfg_path),
            )
            sys.stdout.write(text)
            return 0

        if ns.cmd == "check":
            sys.stdout.write(json.dumps(run_check(ns.document), ensure_ascii=False))
            return 0

    except NodeTplError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
