"""scaffoldkit command line.

Exposes the file engine primitives so they can be driven from shell scripts
and package.json hooks::

    python -m scaffoldkit.cli --project my-app mkdir
    python -m scaffoldkit.cli --project my-app write src/index.js --content "x"
    python -m scaffoldkit.cli insert ./src/app.js "import x from 'x'" --after "// imports"
    python -m scaffoldkit.cli add-script lint "eslint src"
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from rich.markup import escape

from scaffoldkit.config import EnvironmentMode, ProjectContext
from scaffoldkit.fs.errors import OperationResult
from scaffoldkit.toolkit import Toolkit
from scaffoldkit.utils import console


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scaffoldkit",
        description="scaffoldkit -- write, patch and move project files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  scaffoldkit --project my-app mkdir\n"
            "  scaffoldkit --project my-app write README.md --content '# my-app'\n"
            "  scaffoldkit insert ./src/app.js 'app.use(cors())' --after 'const app = express()'\n"
            "  scaffoldkit add-script start 'node server.js'\n"
        ),
    )
    parser.add_argument(
        "--project", "-p",
        default=None,
        help="Scaffold inside ./<PROJECT>/ instead of the current directory",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Append raw error details to failure messages",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    write = sub.add_parser("write", help="Create or overwrite a file")
    write.add_argument("path")
    source = write.add_mutually_exclusive_group()
    source.add_argument("--content", default="", help="Literal file content")
    source.add_argument("--template", help="Template to render into the file")
    write.add_argument(
        "--var", action="append", default=[], metavar="KEY=VALUE",
        help="Template variable (repeatable)",
    )
    write.add_argument("--message", default=None, help="Custom status line")

    mkdir = sub.add_parser("mkdir", help="Create a directory (the project root if PATH is omitted)")
    mkdir.add_argument("path", nargs="?", default=None)

    append = sub.add_parser("append", help="Append text to a file")
    append.add_argument("path")
    append.add_argument("content")

    rename = sub.add_parser("rename", help="Move a file or directory (paths used as given)")
    rename.add_argument("old_path")
    rename.add_argument("new_path")

    move_all = sub.add_parser("move-all", help="Move every entry of a directory, then remove it")
    move_all.add_argument("src_dir")
    move_all.add_argument("dst_dir")

    insert = sub.add_parser("insert", help="Insert a line into an existing file")
    insert.add_argument("path")
    insert.add_argument("content")
    locator = insert.add_mutually_exclusive_group()
    locator.add_argument("--line", type=int, default=None, help="0-based line index")
    locator.add_argument("--after", default=None, help="Insert below the first line equal to this")

    add_script = sub.add_parser("add-script", help="Register a script in package.json")
    add_script.add_argument("name")
    add_script.add_argument("body")

    install = sub.add_parser("install", help="Install packages with yarn or npm")
    install.add_argument("packages", nargs="+")
    install.add_argument("--dev", action="store_true", help="Install as devDependencies")

    sub.add_parser("knex", help="Write knexfile.js and create db/migrations")

    return parser


def _parse_vars(pairs: Sequence[str]) -> dict[str, str]:
    variables: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid --var {pair!r}, expected KEY=VALUE")
        variables[key] = value
    return variables


def run(args: argparse.Namespace, toolkit: Toolkit) -> list[OperationResult]:
    """Dispatch parsed *args* to the toolkit and return the results."""
    files = toolkit.files

    if args.command == "write":
        content = args.content
        if args.template:
            content = toolkit.templates.load_template(args.template, _parse_vars(args.var))
        return [files.write_file(args.path, content, args.message)]
    if args.command == "mkdir":
        return [files.mkdir(args.path)]
    if args.command == "append":
        return [files.append_file(args.path, args.content)]
    if args.command == "rename":
        return [files.rename(args.old_path, args.new_path)]
    if args.command == "move-all":
        result = files.move_all_files_in_dir(args.src_dir, args.dst_dir)
        return [*result.children, result]
    if args.command == "insert":
        locator = args.line if args.line is not None else args.after
        return [toolkit.splicer.insert(args.path, args.content, locator)]
    if args.command == "add-script":
        return [toolkit.manifest.add_script(args.name, args.body)]
    if args.command == "install":
        toolkit.installer.choose_package_manager()
        return [toolkit.installer.install_dependencies(args.packages, dev=args.dev)]
    if args.command == "knex":
        return toolkit.database.modify_knex()
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point for ``scaffoldkit`` / ``python -m scaffoldkit.cli``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    context = ProjectContext.from_env()
    if args.project:
        context = context.with_project(args.project)
    if args.verbose:
        context.environment_mode = EnvironmentMode.VERBOSE

    toolkit = Toolkit(context)
    try:
        results = run(args, toolkit)
    except ValueError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        return 2

    return 0 if all(results) else 1


if __name__ == "__main__":
    sys.exit(main())
