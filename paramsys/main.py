#!/usr/bin/env python3

import sys

from rich.markup import escape

from . import args
from .common       import ParamSystemException, format_list_to_string
from .printer      import cons, cerr
from .params       import ParamContext, canonicalize, from_cli_flag, to_cli_flag
from .params       import parse_parameter_file
from .params.errors import format_error_list
from .params.reporter import dump_values, format_unused
from .params.suggest  import format_suggestion, suggest_similar


def check(arg: dict) -> int:
    ctx = ParamContext()

    errors = []
    for filepath in arg["files"]:
        try:
            parse_parameter_file(ctx, filepath, overwrite=arg["overwrite"])
        except ParamSystemException as exc:
            errors.append(escape(str(exc)))

    if errors:
        cerr.print(format_error_list(errors))
        return 1

    if arg["ini"]:
        ctx.tree.report(cons)
    else:
        cons.write(format_unused(ctx, ctx.tree.flatten()))

    keys = ctx.tree.flatten()
    notes = []
    for key in keys:
        similar = suggest_similar(key, [ k for k in keys if k != key ], min_score=90)
        if similar:
            notes.append(f"{escape(key)}: {escape(format_suggestion(similar))}")

    if notes:
        cons.print("[yellow]Possibly misspelled keys:[/yellow]")
        cons.indent()
        for note in notes:
            cons.print(note)
        cons.unindent()

    if arg["yaml"] is not None:
        dump_values(ctx, arg["yaml"])

    checked = [ f"[magenta]{escape(f)}[/magenta]" for f in arg["files"] ]
    cons.print(f"[bold green]✓[/bold green] Checked {format_list_to_string(checked)}: {len(keys)} parameter(s).")
    return 0


def flag(arg: dict) -> int:
    for name in arg["names"]:
        cons.write(f"{to_cli_flag(canonicalize(name, True))}\n")
    return 0


def name(arg: dict) -> int:
    for cli_flag in arg["flags"]:
        cons.write(f"{from_cli_flag(cli_flag.split('=', 1)[0])}\n")
    return 0


def main(argv=None) -> None:
    try:
        arg = args.parse(argv)
        sys.exit({"check": check, "flag": flag, "name": name}[arg["command"]](arg))
    except ParamSystemException as exc:
        cerr.reset()
        cerr.print(f"""\
[bold red]Error[/bold red]: {escape(str(exc))}
""")
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)
    except Exception:
        cerr.reset()
        cerr.print_exception()
        cerr.print("[bold red]Error[/bold red]: An unexpected exception occurred.")
        sys.exit(1)


if __name__ == "__main__":
    main()
