"""Positional message template rendering"""

from typing import Any, Sequence

from logging_wrapper.core.exceptions import MessageFormattingError


def format_message(template: str, params: Sequence[Any]) -> str:
    """
    Substitute params into the positional placeholders of template.

    Placeholders follow str.format syntax: "{0}", "{1:>8}", and so on.
    Extra params are ignored.

    Args:
        template: Message template
        params: Values for the placeholders

    Returns:
        Formatted message

    Raises:
        MessageFormattingError: If a placeholder has no matching param,
            names a keyword, has a bad format spec or braces are unbalanced
    """
    try:
        return template.format(*params)
    except (IndexError, KeyError, ValueError, TypeError, AttributeError) as e:
        raise MessageFormattingError(
            f"Error occurs when formatting the message with params: {e}"
        ) from e
