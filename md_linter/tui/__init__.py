from md_linter.tui.renderers import LintConsoleUI

__all__ = ["LintConsoleUI"]
