"""Application entry point for largetextpaste."""

from __future__ import annotations

import argparse
import logging
import os
import signal
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional, TextIO

from art import text2art
from dotenv import load_dotenv

import settings
from adapters.host_hooks import LargeTextPasteModule
from adapters.pastebin_client import PastebinClient
from core.config import ConfigStore, validate_config
from core.errors import ConfigError, OffloadError
from core.models import OutboundMessage
from core.offloader import PasteOffloader

NAME = "PASTE"
FONT = "tarty-1"

CHANNEL_PREFIXES = ("#", "&")


def _print_banner() -> None:
    # The banner goes to stderr so `run` and `paste` keep stdout clean.
    print(text2art(NAME, font=FONT, space=1), file=sys.stderr)


class _RedactingFormatter(logging.Formatter):
    def __init__(self, secrets: list[str], fmt: str, datefmt: Optional[str] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._secrets = [secret for secret in secrets if secret]

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        return message


def _collect_redaction_values(config: dict, api_key: str = "") -> list[str]:
    redact_cfg = config.get("redact", {}) if config else {}
    if not redact_cfg.get("enabled", False):
        return []
    values = [api_key] if api_key else []
    for name in redact_cfg.get("patterns", []):
        value = os.getenv(name)
        if value:
            values.append(value)
    return sorted(set(values), key=len, reverse=True)


def _configure_logging(source: settings.JsonConfigSource, api_key: str = "") -> None:
    config = source.read_logging()
    if not config.get("enabled", False):
        return

    load_dotenv()
    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    secrets = _collect_redaction_values(config, api_key)
    formatter = _RedactingFormatter(secrets, fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        # stderr keeps log lines out of the rewritten message stream.
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/largetextpaste.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def _active_api_key(source: settings.JsonConfigSource) -> str:
    try:
        return source.read_offload_config().api_key
    except ConfigError:
        return ""


def _is_channel(target: str) -> bool:
    return target.startswith(CHANNEL_PREFIXES)


def _install_rehash_signal(module: LargeTextPasteModule) -> None:
    # SIGHUP is the conventional daemon reload signal; not every platform has it.
    sighup = getattr(signal, "SIGHUP", None)
    if sighup is None:
        return

    def _on_sighup(signum, frame) -> None:
        logging.getLogger(__name__).info("SIGHUP received, rehashing")
        module.on_rehash()

    signal.signal(sighup, _on_sighup)


def run_lines(
    module: LargeTextPasteModule,
    lines: TextIO,
    out: TextIO,
    nick: str,
    target: str,
    local: bool = True,
) -> int:
    """Feed each input line through the module as one outbound message."""

    handled = 0
    for line in lines:
        message = OutboundMessage(
            originator_name=nick,
            body_text=line.rstrip("\r\n"),
            is_channel_target=_is_channel(target),
            is_local_origin=local,
        )
        module.on_user_pre_message(message)
        out.write(f"{message.body_text}\n")
        out.flush()
        handled += 1
    return handled


def _run(args: argparse.Namespace) -> int:
    source = settings.JsonConfigSource()
    _configure_logging(source, _active_api_key(source))
    logger = logging.getLogger(__name__)

    logger.info("Starting largetextpaste line host")
    module = LargeTextPasteModule(PastebinClient(), source)
    module.init()
    _install_rehash_signal(module)
    try:
        handled = run_lines(
            module,
            sys.stdin,
            sys.stdout,
            nick=args.nick,
            target=args.target,
            local=not args.remote,
        )
    except KeyboardInterrupt:
        handled = None
    finally:
        module.close()
    if handled is not None:
        logger.info("Input closed after %s messages", handled)
    return 0


def _read_paste_input(name: str) -> str:
    if name == "-":
        return sys.stdin.read()
    with open(name, "r", encoding="utf-8") as handle:
        return handle.read()


def _paste(args: argparse.Namespace) -> int:
    source = settings.JsonConfigSource()
    _configure_logging(source, _active_api_key(source))
    try:
        config = source.read_offload_config()
        validate_config(config)
    except ConfigError as exc:
        print(f"config error: {exc}", file=sys.stderr)
        return 1
    if not config.api_key:
        print(f"apikey is not set (config or {settings.API_KEY_ENV})", file=sys.stderr)
        return 1

    try:
        text = _read_paste_input(args.file)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"file error: {exc}", file=sys.stderr)
        return 1

    message = OutboundMessage(
        originator_name=args.nick,
        body_text=text,
        is_channel_target=True,
        is_local_origin=True,
    )
    with PastebinClient() as client:
        offloader = PasteOffloader(client, ConfigStore(config))
        try:
            link = offloader.offload(message, config)
        except OffloadError as exc:
            print(f"upload failed: {exc}", file=sys.stderr)
            return 1
    print(link.strip())
    return 0


def _check(args: argparse.Namespace) -> int:
    source = settings.JsonConfigSource()
    try:
        config = source.read_offload_config()
        warnings = validate_config(config)
    except ConfigError as exc:
        print(f"config error: {exc}")
        return 1

    print(f"config: {source.path}")
    print(f"service_url: {config.service_url}")
    print(f"sniplen: {config.snippet_length}")
    print(f"cutofflen: {config.cutoff_length}")
    print(f"timeout: {config.timeout_seconds}")
    print(f"apikey: {'set' if config.api_key else 'unset'}")
    for warning in warnings:
        print(f"warning: {warning}")
    return 0


def _config_panel() -> int:
    from frontend.app import ConfigPanelApp

    ConfigPanelApp().run()
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="largetextpaste")
    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser("run", help="Filter stdin lines as channel messages")
    run_parser.add_argument("--nick", default="user", help="Originator name for each message")
    run_parser.add_argument("--target", default="#channel", help="Message target (#chan or nick)")
    run_parser.add_argument("--remote", action="store_true", help="Treat messages as relayed")

    paste_parser = subparsers.add_parser("paste", help="Upload a file and print the link")
    paste_parser.add_argument("file", help="File to upload, or - for stdin")
    paste_parser.add_argument("--nick", default="user", help="Name used for the paste title")

    subparsers.add_parser("check", help="Validate the config and print a summary")
    subparsers.add_parser("config", help="Launch the config TUI")

    args = parser.parse_args(argv)
    if args.command == "config":
        _print_banner()
        return _config_panel()
    if args.command == "paste":
        return _paste(args)
    if args.command == "check":
        return _check(args)
    if args.command is None:
        args = run_parser.parse_args([])
    _print_banner()
    return _run(args)


if __name__ == "__main__":
    sys.exit(main())
