from enum import Enum

from window_rules.models import PolicyKind


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"
    DIM = "dim"
    WHITE = "white"


POLICY_KIND_STYLE = {
    PolicyKind.NONE: UIStyle.DIM.value,
    PolicyKind.STRING_MATCH: UIStyle.CYAN.value,
    PolicyKind.SET_RULE: UIStyle.GREEN.value,
    PolicyKind.FORCE_RULE: UIStyle.MAGENTA.value,
}
