from enum import Enum

from md_linter.models import LintStatus


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    RED = "red"
    CYAN = "cyan"
    DIM = "dim"
    WHITE = "white"


LINT_STATUS_STYLE = {
    LintStatus.UNCHANGED: UIStyle.DIM.value,
    LintStatus.CHANGED: UIStyle.CYAN.value,
    LintStatus.FAILED: UIStyle.RED.value,
}
