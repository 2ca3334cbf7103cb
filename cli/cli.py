# cli/cli.py
"""
Command-line front end for the landing-page form handler.
"""
from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from dataclasses import replace
from typing import Callable, Dict, Optional

from leadform.core.config import FormConfig, settings
from leadform.core.logging import configure_structlog
from leadform.schemas.payload import OutboundPayload
from leadform.services.form_view import RawFormValues
from leadform.services.phone_mask import PhoneMask
from leadform.services.submission import SubmissionOrchestrator
from leadform.services.tracking import PageContext, PageTrackingSource
from leadform.services.transport import TransportResult, WebhookTransport
from leadform.services.validation import FIELDS, validate_form


# Output formatting utilities
def _supports_color() -> bool:
    """Check if terminal supports ANSI color codes."""
    if sys.platform == "win32":
        return os.getenv("TERM") == "xterm" or os.getenv("ANSICON") is not None
    return sys.stdout.isatty()


SUPPORTS_COLOR = _supports_color()

# ANSI color codes
GREEN = '\033[92m' if SUPPORTS_COLOR else ''
RED = '\033[91m' if SUPPORTS_COLOR else ''
YELLOW = '\033[93m' if SUPPORTS_COLOR else ''
BLUE = '\033[94m' if SUPPORTS_COLOR else ''
RESET = '\033[0m' if SUPPORTS_COLOR else ''


def print_success(message: str):
    """Print success message with [✓] symbol."""
    print(f"{GREEN}[✓]{RESET} {message}")


def print_error(message: str):
    """Print error message with [✗] symbol."""
    print(f"{RED}[✗]{RESET} {message}")


def print_warning(message: str):
    """Print warning message with [!] symbol."""
    print(f"{YELLOW}[!]{RESET} {message}")


def print_info(message: str):
    """Print info message with [i] symbol."""
    print(f"{BLUE}[i]{RESET} {message}")


class ConsoleFormView:
    """FormView backed by command-line arguments; side effects go to stdout."""

    def __init__(self, values: RawFormValues):
        self.values = values
        self.navigated_to: Optional[str] = None

    def read_values(self) -> RawFormValues:
        return self.values

    def mark_error(self, field: str, message: str) -> None:
        print_error(f"  {field}: {message}")

    def clear_error(self, field: str) -> None:
        pass

    def set_loading(self, loading: bool) -> None:
        if loading:
            print_info("Sending...")

    def alert(self, message: str) -> None:
        print_warning(message)

    def navigate(self, url: str) -> None:
        self.navigated_to = url
        print_success(f"Redirect to {url}")


class DryRunTransport:
    """Prints the payload instead of posting it."""

    async def send(self, payload: OutboundPayload) -> TransportResult:
        print(json.dumps(payload.to_json_dict(), indent=2, ensure_ascii=False))
        return TransportResult(delivered=True)


def _form_values(args: argparse.Namespace) -> RawFormValues:
    # The phone control is masked as it is typed; do the same for the argument
    mask = PhoneMask(country_code=settings.phone_country_code)
    return RawFormValues(
        name=args.name,
        email=args.email,
        phone=mask.apply_mask(args.phone),
        accepted_policy=args.accept_policy,
    )


# Command functions
def cmd_mask(args: argparse.Namespace) -> int:
    """Command: Apply the phone mask to a value."""
    mask = PhoneMask(country_code=settings.phone_country_code)
    print(mask.apply_mask(args.value))
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Command: Validate form fields without submitting."""
    results = validate_form(_form_values(args).as_field_map(), country_code=settings.phone_country_code)

    for field in FIELDS:
        result = results[field]
        if result.valid:
            print_success(f"{field}: ok")
        else:
            print_error(f"{field}: {result.message}")

    return 0 if all(result.valid for result in results.values()) else 1


async def cmd_submit(args: argparse.Namespace) -> int:
    """Command: Validate, build the payload and post it to the webhook."""
    config = FormConfig.from_settings(settings)
    if args.webhook_url:
        config = replace(config, webhook_url=args.webhook_url)

    transport = DryRunTransport() if args.dry_run else WebhookTransport(
        config.webhook_url, timeout=config.webhook_timeout_seconds
    )
    view = ConsoleFormView(_form_values(args))
    tracking = PageTrackingSource(
        PageContext(
            url=args.page_url,
            referrer=args.referrer,
            title=args.title,
            user_agent=f"leadform-cli/{sys.version_info.major}.{sys.version_info.minor}",
            language=args.language,
        )
    )
    orchestrator = SubmissionOrchestrator(config=config, view=view, tracking=tracking, transport=transport)

    outcome = await orchestrator.submit()
    if not outcome.succeeded:
        return 1

    if outcome.delivery and not outcome.delivery.delivered:
        print_warning(f"Webhook did not confirm delivery: {outcome.delivery.error_message}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Command: Run the HTTP API."""
    import uvicorn

    uvicorn.run(
        "leadform.main:app",
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        reload=args.reload,
    )
    return 0


# Command registry
COMMANDS: Dict[str, Callable] = {
    'mask': cmd_mask,
    'validate': cmd_validate,
    'submit': cmd_submit,
    'serve': cmd_serve,
}


def _add_form_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--name', default='', help='Full name')
    parser.add_argument('--email', default='', help='E-mail address')
    parser.add_argument('--phone', default='', help='Phone number, masked or digits')
    parser.add_argument('--accept-policy', action='store_true', help='Accept the privacy policy')


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with all commands."""
    parser = argparse.ArgumentParser(
        description='Landing-page form handler CLI',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    # mask
    mask_parser = subparsers.add_parser('mask', help='Format a phone number')
    mask_parser.add_argument('value', help='Raw phone input')

    # validate
    validate_parser = subparsers.add_parser('validate', help='Validate form fields')
    _add_form_arguments(validate_parser)

    # submit
    submit_parser = subparsers.add_parser('submit', help='Submit the form to the webhook')
    _add_form_arguments(submit_parser)
    submit_parser.add_argument('--page-url', default='', help='Landing page URL, with its query string')
    submit_parser.add_argument('--referrer', default=None, help='Referrer of the landing page')
    submit_parser.add_argument('--title', default='', help='Landing page title')
    submit_parser.add_argument('--language', default='pt-BR', help='Browser language')
    submit_parser.add_argument('--webhook-url', default=None, help='Override WEBHOOK_URL')
    submit_parser.add_argument('--dry-run', action='store_true', help='Print the payload instead of posting it')

    # serve
    serve_parser = subparsers.add_parser('serve', help='Run the HTTP API')
    serve_parser.add_argument('--host', default=None, help='Bind address')
    serve_parser.add_argument('--port', type=int, default=None, help='Bind port')
    serve_parser.add_argument('--reload', action='store_true', help='Reload on code changes')

    return parser


def main(args: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    command_func = COMMANDS.get(parsed_args.command)
    if not command_func:
        print_error(f"Unknown command: {parsed_args.command}")
        parser.print_help()
        return 1

    # stdout carries command output; logs go to stderr
    configure_structlog(log_format="console", stream=sys.stderr)

    try:
        exit_code = command_func(parsed_args)
        if asyncio.iscoroutine(exit_code):
            exit_code = asyncio.run(exit_code)
        return exit_code
    except KeyboardInterrupt:
        print_error("\nInterrupted by user")
        return 130
    except Exception as e:
        print_error(f"Error executing command: {str(e)}")
        if os.getenv('DEBUG'):
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
