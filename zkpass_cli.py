"""Command line interface for the Chaum-Pedersen authentication server and client."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace

from zkpass.auth import AuthService
from zkpass.client import AuthClient, derive_secret, login
from zkpass.config import Settings
from zkpass.errors import ZKPassError
from zkpass.factory import DISCRETE_LOG, ELLIPTIC_CURVE, available_suites, load_suite
from zkpass.protocol import execute_protocol
from zkpass.session import SessionStore

logger = logging.getLogger("zkpass")


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--log-level",
        help="Logging level (default: ZKPASS_LOG_LEVEL or INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("server", "Run the authentication server"),
        ("login", "Register a user and authenticate once against a server"),
    ):
        command = subparsers.add_parser(name, help=help_text)
        command.add_argument("--host", help="Server host (default: ZKPASS_HOST or 127.0.0.1)")
        command.add_argument("--port", type=int, help="Server port (default: ZKPASS_PORT or 50051)")
        command.add_argument(
            "--type",
            choices=[DISCRETE_LOG, ELLIPTIC_CURVE],
            help="Protocol flavour (default: ZKPASS_TYPE or discrete_log)",
        )
        command.add_argument(
            "--params",
            help=(
                "Parameter set: an RFC 5114 group for discrete_log, or ec25519, "
                "pallas or vesta for elliptic_curve"
            ),
        )

    server_parser = subparsers.choices["server"]
    server_parser.add_argument(
        "--session-timeout",
        type=float,
        help="Seconds of inactivity after which a session expires",
    )
    server_parser.add_argument(
        "--sweep-interval",
        type=float,
        help="Seconds between two session sweeps",
    )

    login_parser = subparsers.choices["login"]
    login_parser.add_argument("--user", default="foo", help="User name to register (default: foo)")
    login_parser.add_argument(
        "--secret",
        help="Password the secret is derived from. If omitted a random secret is used.",
    )

    subparsers.add_parser("params", help="List the available parameter sets")
    subparsers.add_parser("selftest", help="Run one honest protocol round over every parameter set")

    return parser.parse_args(argv)


def build_settings(namespace: argparse.Namespace) -> Settings:
    settings = Settings.from_env()
    overrides = {
        "host": getattr(namespace, "host", None),
        "port": getattr(namespace, "port", None),
        "type": getattr(namespace, "type", None),
        "params": getattr(namespace, "params", None),
        "session_timeout": getattr(namespace, "session_timeout", None),
        "sweep_interval": getattr(namespace, "sweep_interval", None),
        "log_level": namespace.log_level.upper() if namespace.log_level else None,
    }
    settings = replace(settings, **{key: value for key, value in overrides.items() if value is not None})
    if settings.params not in available_suites().get(settings.type, []) and overrides["params"] is None:
        # Switching the protocol flavour alone picks that flavour's default parameter set.
        default_params = {DISCRETE_LOG: "rfc5114_modp_1024_160", ELLIPTIC_CURVE: "ec25519"}
        settings = replace(settings, params=default_params.get(settings.type, settings.params))
    return settings


def run_server(settings: Settings) -> int:
    import uvicorn

    from zkpass.server import create_app

    suite = load_suite(settings.type, settings.params)
    sessions = SessionStore(timeout=settings.session_timeout, interval=settings.sweep_interval)
    app = create_app(AuthService(suite, sessions=sessions))
    logger.info("Starting ZKPass server on %s:%s (%s/%s)", settings.host, settings.port, suite.kind, suite.name)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    return 0


def run_login(settings: Settings, user: str, password: str | None) -> int:
    suite = load_suite(settings.type, settings.params)
    secret = derive_secret(suite.group, password)
    with AuthClient(settings.base_url) as client:
        try:
            session_id = login(client, suite, user, secret)
        except ZKPassError as exc:
            print(f"Authentication failed: {exc}", file=sys.stderr)
            return 1
    print(json.dumps({"user": user, "session_id": session_id}, indent=2))
    return 0


def run_selftest() -> int:
    results = {}
    for kind, names in available_suites().items():
        for name in names:
            suite = load_suite(kind, name)
            secret = suite.group.random_scalar()
            results[f"{kind}/{name}"] = execute_protocol(suite.protocol, suite.params, secret)
    print(json.dumps(results, indent=2))
    return 0 if all(results.values()) else 1


def main(argv: list[str] | None = None) -> int:
    namespace = parse_args(argv or sys.argv[1:])
    settings = build_settings(namespace)
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if namespace.command == "params":
        print(json.dumps(available_suites(), indent=2))
        return 0

    if namespace.command == "selftest":
        return run_selftest()

    try:
        load_suite(settings.type, settings.params)
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    if namespace.command == "server":
        return run_server(settings)

    if namespace.command == "login":
        return run_login(settings, namespace.user, namespace.secret)

    raise RuntimeError("Unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
