import re
from enum import Enum
from typing import NamedTuple, Optional


class Action(Enum):
    VIEW = "view"
    EDIT = "edit"
    SAVE = "save"


class WikiPath(NamedTuple):
    action: Action
    title: str


TITLE_PATTERN = re.compile(r"[a-zA-Z0-9]+")
PATH_PATTERN = re.compile(
    r"/(?P<action>%s)/(?P<title>%s)"
    % ("|".join(action.value for action in Action), TITLE_PATTERN.pattern)
)


def is_valid_title(title) -> bool:
    """
    Check a title against the page title rule: one or more ASCII letters or digits.
    """
    return isinstance(title, str) and TITLE_PATTERN.fullmatch(title) is not None


def parse_path(path) -> Optional[WikiPath]:
    """
    Split a request path of the form /<action>/<title> into its parts.
    Args:
        path (str): The decoded URL path, e.g. "/view/FrontPage".
    Returns:
        WikiPath: The action and title when the whole path matches, otherwise None.
            Nothing is truncated or normalised, a path either matches entirely or not at all.
    """
    if not isinstance(path, str):
        return None
    match = PATH_PATTERN.fullmatch(path)
    if match is None:
        return None
    return WikiPath(action=Action(match.group("action")), title=match.group("title"))
