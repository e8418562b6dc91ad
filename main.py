from rich.console import Console

from canopy import *


def build():
    app = CommandNode(
        "app",
        "Demo application",
        help_all_flag=("--help-all",),
        footer="Run 'app <command> --help' for more about a command.",
    )
    app.add_flag("--flag", descr="This is a flag")
    app.add_option("--level", descr="Verbosity level", type_name="INT", default=1, envname="APP_LEVEL")
    app.add_option("file", descr="Input file", required=True)

    one = app.add_subcommand("one", "Description One")
    one.add_subcommand("three", "Description Three")
    one.add_subcommand("six", "Description Six")

    two = app.add_subcommand("two", "Description Two", aliases=("deux",))
    four = two.add_subcommand("four", "Description Four")
    four.add_subcommand("five", "Description Five")
    return app


if __name__ == '__main__':
    console = Console()
    app = build()
    for mode in (FormatMode.NORMAL, FormatMode.ALL, FormatMode.ALL_COMPACT):
        console.rule(mode.value, style="dim")
        display(app, mode, console=console, colorful=True)
