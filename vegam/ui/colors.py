"""Rich styles used by the typing screen."""


class TypingColors:
    """Plain terminal palette: named colors only, so any 16-color terminal works."""

    LABEL = "bold blue"
    SELECTED_GROUP = "bold underline green"
    GROUP = ""

    PENDING = "grey50"
    TYPED = ""
    MISTAKE = "on red"
    COMMITTED = "grey50"
    COMMITTED_MISTAKE = "bold red"

    CORRECT_COUNT = "bold green"
    INCORRECT_COUNT = "bold red"
    SOURCE = "italic"
    NOTICE = "bold yellow"
    TITLE = "bold green"
