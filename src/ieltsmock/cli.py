"""
Command-line interface for the ieltsmock client.

Every command prints its result as JSON on stdout; logs go to stderr.
The session obtained by ``sign-in`` is kept in a token file so that later
invocations reuse it.

Usage:
    ieltsmock sign-in --username admin
    ieltsmock tests --page 0 --size 20
    ieltsmock validate /path/to/config.yaml
"""

import argparse
import getpass
import json
import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel

from ieltsmock.client import IeltsMockClient
from ieltsmock.core.exceptions import IeltsMockException
from ieltsmock.core.logger import configure_root_logger, get_logger
from ieltsmock.models.api_types import SignInDto
from ieltsmock.models.client_config import ClientConfig, load_config

logger = get_logger(__name__)

DEFAULT_TOKEN_FILE = "~/.ieltsmock/session.json"
ENV_PASSWORD = "IELTS_MOCK_PASSWORD"


def validate_config(config_path: str) -> bool:
    """
    Validate a configuration file without contacting the API.

    Raises:
        ConfigError: If the file is missing or invalid

    Example:
        >>> validate_config("/path/to/config.json")
        True
    """
    logger.info(f"Validating config: {config_path}")
    cfg = load_config(config_path)
    logger.info(f"Configuration is valid (base_url={cfg.base_url})")
    return True


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return value


def _cmd_sign_in(api: IeltsMockClient, args: argparse.Namespace) -> Any:
    password = args.password or os.environ.get(ENV_PASSWORD) or getpass.getpass("Password: ")
    session = api.auth.sign_in(SignInDto(username=args.username, password=password))
    return {"username": session.user.username, "role": session.user.role}


def _cmd_sign_out(api: IeltsMockClient, args: argparse.Namespace) -> Any:
    api.auth.sign_out()
    return {"signed_out": True}


def _cmd_me(api: IeltsMockClient, args: argparse.Namespace) -> Any:
    return api.auth.get_me()


def _cmd_tests(api: IeltsMockClient, args: argparse.Namespace) -> Any:
    if args.available:
        return api.mock_submission.get_all_tests(page=args.page, size=args.size)
    return api.tests.get_all_tests(page=args.page, size=args.size)


def _cmd_mocks(api: IeltsMockClient, args: argparse.Namespace) -> Any:
    return api.mock_submission.get_all_mocks(page=args.page, size=args.size)


def _cmd_results(api: IeltsMockClient, args: argparse.Namespace) -> Any:
    return api.mock_results.get_all_mock_results(page=args.page, size=args.size)


def _cmd_students(api: IeltsMockClient, args: argparse.Namespace) -> Any:
    return api.users.get_all_students(
        page=args.page,
        size=args.size,
        username=args.username,
        full_name=args.full_name,
    )


COMMANDS: Dict[str, Callable[[IeltsMockClient, argparse.Namespace], Any]] = {
    "sign-in": _cmd_sign_in,
    "sign-out": _cmd_sign_out,
    "me": _cmd_me,
    "tests": _cmd_tests,
    "mocks": _cmd_mocks,
    "results": _cmd_results,
    "students": _cmd_students,
}


def _build_config(args: argparse.Namespace) -> ClientConfig:
    cfg = load_config(args.config) if args.config else ClientConfig.from_env()
    token_file = args.token_file or cfg.token_file or DEFAULT_TOKEN_FILE
    return cfg.model_copy(update={"token_file": str(Path(token_file).expanduser())})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ieltsmock",
        description="Client for the IELTS mock testing API",
    )
    parser.add_argument("--config", "-c", help="Path to configuration file (JSON or YAML)")
    parser.add_argument("--token-file", help=f"Session file (default: {DEFAULT_TOKEN_FILE})")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    validate_parser = subparsers.add_parser("validate", help="Validate configuration without calling the API")
    validate_parser.add_argument("config_file", help="Path to configuration file (JSON or YAML)")

    sign_in = subparsers.add_parser("sign-in", help="Sign in and store the session")
    sign_in.add_argument("--username", "-u", required=True)
    sign_in.add_argument("--password", "-p", help=f"Password (default: ${ENV_PASSWORD} or prompt)")

    subparsers.add_parser("sign-out", help="Forget the stored session")
    subparsers.add_parser("me", help="Show the signed-in user")

    def paged(name: str, help_text: str, size: int) -> argparse.ArgumentParser:
        p = subparsers.add_parser(name, help=help_text)
        p.add_argument("--page", type=int, default=0, help="Page number (0-indexed)")
        p.add_argument("--size", type=int, default=size, help="Items per page")
        return p

    tests = paged("tests", "List tests (admin view)", 10)
    tests.add_argument("--available", action="store_true", help="List tests open for taking instead")
    paged("mocks", "List your mocks", 10)
    paged("results", "List mock results (admin)", 20)
    students = paged("students", "List students (admin)", 100)
    students.add_argument("--username")
    students.add_argument("--full-name")

    return parser


def cli(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_root_logger("DEBUG" if args.verbose else "INFO")

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "validate":
        try:
            validate_config(args.config_file)
            return 0
        except IeltsMockException as e:
            logger.error(f"Validation failed: {e}")
            return 1

    try:
        with IeltsMockClient(_build_config(args)) as api:
            result = COMMANDS[args.command](api, args)
    except IeltsMockException as e:
        logger.error(f"{args.command} failed: {e}")
        return 1
    except ValueError as e:
        # pydantic ValidationError for bad arguments
        logger.error(f"{args.command} rejected: {e}")
        return 1

    print(json.dumps(_to_jsonable(result), indent=2, ensure_ascii=False))
    return 0


def main() -> None:
    sys.exit(cli())


if __name__ == "__main__":
    main()
