from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_fixed
from typing import List, Optional, Tuple

from pydantic import AnyUrl, TypeAdapter, ValidationError

from ccrun.const import PASSTHROUGH_SEPARATOR, PERSIST_FLAG, RESTORE_MAX_ATTEMPTS, RESTORE_WAIT_SECONDS
from ccrun.logger import _logger
from ccrun.models import PassthroughArgsError

_URL_ADAPTER = TypeAdapter(AnyUrl)

PASSTHROUGH_USAGE = """Passthrough arguments are in the wrong position.

Correct usage:
  cc-run glm -- <claude args>          # use the glm provider and pass arguments through
  cc-run --claude -- <claude args>     # restore the official config and pass arguments through
  cc-run glm --claude -- <claude args> # make the native claude command use glm

The -- separator passes every argument after it to the Claude CLI."""

def prompt(question :str)->str:
    """Ask the user for a line of input; end of input counts as an empty answer."""
    try:
        return input(question).strip()
    except EOFError:
        print()
        return ""

def is_valid_url(url :Optional[str])->bool:
    if not url:
        return False
    try:
        _URL_ADAPTER.validate_python(url)
    except ValidationError:
        return False
    return True

def mask_secret(value :Optional[str])->str:
    if not value:
        return "<unset>"
    if len(value) <= 8:
        return "*" * len(value)
    return f"{value[:4]}...{value[-4:]}"

def split_passthrough_args(args :List[str])->Tuple[List[str], List[str]]:
    """Split user arguments at the first ``--`` into (own args, args for claude)."""
    if PASSTHROUGH_SEPARATOR not in args:
        return list(args), []
    index = args.index(PASSTHROUGH_SEPARATOR)
    return list(args[:index]), list(args[index + 1:])

def extract_passthrough_args(args :List[str])->List[str]:
    return split_passthrough_args(args)[1]

def validate_dash_position(args :List[str])->None:
    """
    Ensure ``--`` follows a provider name or ``--claude``, or comes first.

    Raises:
        PassthroughArgsError: if only other options precede the separator.
    """
    if PASSTHROUGH_SEPARATOR not in args:
        return

    index = args.index(PASSTHROUGH_SEPARATOR)
    if index == 0:
        return

    before = args[:index]
    if not any(not arg.startswith("-") or arg == PERSIST_FLAG for arg in before):
        raise PassthroughArgsError(
            message="Error: -- must come after a provider name or the --claude option",
            hint=PASSTHROUGH_USAGE
        )

def log_retry(retry_state)->None:
    """Log a failed attempt before tenacity sleeps and retries."""
    attempt_number = retry_state.attempt_number
    next_attempt_in = retry_state.next_action.sleep
    exception_str = str(retry_state.outcome.exception())
    _logger.logger.warning(
        f"Attempt {attempt_number}/{RESTORE_MAX_ATTEMPTS} failed. "
        f"Retrying in {next_attempt_in:.1f} seconds. Error: {exception_str}"
    )

def retry_on_os_error(func):
    """Retry a file operation on OSError, re-raising the last error once attempts run out."""
    return retry(
        stop=stop_after_attempt(RESTORE_MAX_ATTEMPTS),
        wait=wait_fixed(RESTORE_WAIT_SECONDS),
        retry=retry_if_exception_type(OSError),
        before_sleep=log_retry,
        reraise=True
    )(func)
