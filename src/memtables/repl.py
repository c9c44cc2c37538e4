"""Interactive REPL and script runner for the memtables query language."""

from __future__ import annotations

import argparse
import logging
import readline
import sys
from pathlib import Path
from typing import Callable

from memtables.database import AnyDatabase
from memtables.dump import format_query
from memtables.errors import DatabaseError, InvalidPathError, ScriptIOError
from memtables.parsing.query_parser import QueryParser, ReadFromQuery, SaveAsQuery
from memtables.types import KEY_TYPES

logger = logging.getLogger(__name__)


class Session:
    """One client's view of a database plus the history of statements it ran.

    The history holds the canonical text of every data statement that
    executed successfully, in order; SAVE_AS writes it out and READ_FROM
    replays a file written that way.
    """

    def __init__(self, database: AnyDatabase, echo: Callable[[str], None] = print) -> None:
        self.database = database
        self.echo = echo
        self.history: list[str] = []
        self.parser = QueryParser()
        self._replaying: set[Path] = set()

    def process(self, line: str) -> list[str]:
        """Parse and execute one statement.

        Each message is echoed as soon as it is produced.

        Returns:
            The messages produced, in order. A READ_FROM returns the
            ``FILE> `` lines and results of every replayed statement.

        Raises:
            DatabaseError: If the statement fails; the history is unchanged.
        """
        query = self.parser.parse(line)

        if isinstance(query, ReadFromQuery):
            return self.replay(query.path)

        if isinstance(query, SaveAsQuery):
            self.save_history(query.path)
            messages = [f"Saved history to: {query.path}"]
        else:
            result = self.database.execute(query)
            self.history.append(format_query(query))
            messages = [] if result is None else [result]

        for message in messages:
            self.echo(message)
        return messages

    def save_history(self, path: str) -> None:
        """Write the history to a file, one statement per line."""
        if not path:
            raise InvalidPathError(path)
        try:
            Path(path).write_text("\n".join(self.history))
        except OSError as e:
            raise ScriptIOError(path, e) from e
        logger.info("saved %d statement(s) to %s", len(self.history), path)

    def replay(self, path: str) -> list[str]:
        """Execute every non-blank line of a file in order.

        The first failing line aborts the replay; statements before it stay
        applied.
        """
        if not path:
            raise InvalidPathError(path)
        file_path = Path(path).resolve()
        if file_path in self._replaying:
            raise InvalidPathError(f"{path} (already being read)")
        try:
            content = file_path.read_text()
        except OSError as e:
            raise ScriptIOError(path, e) from e

        logger.info("replaying %s", path)
        messages: list[str] = []
        self._replaying.add(file_path)
        try:
            for line in content.splitlines():
                statement = line.strip()
                if not statement:
                    continue
                self.echo(f"FILE> {statement}")
                messages.append(f"FILE> {statement}")
                messages.extend(self.process(statement))
        finally:
            self._replaying.discard(file_path)
        return messages


def run_repl(session: Session) -> int:
    """Run the interactive REPL."""
    print(f"Database is ready (Key type: {session.database.key_type}).")
    print("Type 'help' for commands, 'exit' to quit.\n")

    history_file = Path.home() / ".mtq_history"
    try:
        readline.read_history_file(history_file)
    except OSError:
        pass

    try:
        while True:
            try:
                line = input("> ").strip()
            except EOFError:
                print()
                break

            if not line:
                continue
            if line.lower() in ("exit", "quit"):
                break
            elif line.lower() == "help":
                print_help()
                continue

            try:
                session.process(line)
            except DatabaseError as e:
                logger.debug("statement failed: %s", line, exc_info=True)
                print(f"Error: {e}")
    finally:
        try:
            readline.set_history_length(1000)
            readline.write_history_file(history_file)
        except OSError:
            pass

    return 0


def print_help() -> None:
    """Print help information."""
    print("""
STATEMENTS (one per line, keywords are case-sensitive):
  CREATE <table> KEY <pk> FIELDS <col>:<Type>, ...
                           Create a table; <pk> must be one of the columns
  INSERT <col>=<value>, ... INTO <table>
                           Insert a record; every column must be given
  SELECT <col>, ... FROM <table> [WHERE <col> <op> <value>]
                           Print the chosen columns, ordered by primary key
  DELETE <key> FROM <table>
                           Delete the record with that primary key
  SAVE_AS <path>           Write the statements run so far to a file
  READ_FROM <path>         Run the statements in a file

TYPES:     Int, Float, Bool, String
VALUES:    42, -7, 3.14, true, false, "text"
OPERATORS: =, !=, <, <=, >, >=

OTHER:
  help                     Show this help
  exit, quit               Exit the REPL

EXAMPLE:
  CREATE people KEY id FIELDS id:Int, name:String, height:Float
  INSERT id=1, name="Alice", height=170.5 INTO people
  SELECT name, height FROM people WHERE height > 160.0
""")


def run_file(file_path: Path, key_type: str = "string", verbose: bool = False) -> int:
    """Execute the statements in a file against a fresh database.

    Args:
        file_path: Path to the file containing statements
        key_type: Primary key type of the database ("int" or "string")
        verbose: If True, print each statement before executing

    Returns:
        0 on success, 1 on error
    """
    def echo(message: str) -> None:
        if verbose or not message.startswith("FILE> "):
            print(message)

    session = Session(AnyDatabase.for_key_type(key_type), echo=echo)
    try:
        session.replay(str(file_path))
    except DatabaseError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    arg_parser = argparse.ArgumentParser(
        description="Interactive REPL for the memtables query language"
    )
    arg_parser.add_argument(
        "-k", "--key-type",
        choices=sorted(KEY_TYPES),
        default="string",
        help="Primary key type shared by all tables (default: string)",
    )
    arg_parser.add_argument(
        "-c", "--command",
        type=str,
        help="Execute a single statement and exit",
    )
    arg_parser.add_argument(
        "-f", "--file",
        type=Path,
        help="Execute statements from a file and exit",
    )
    arg_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print each statement before executing (for -f/--file)",
    )
    arg_parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for diagnostics on stderr (default: WARNING)",
    )

    args = arg_parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    if args.file:
        if not args.file.exists():
            print(f"Error: File not found: {args.file}", file=sys.stderr)
            return 1
        return run_file(args.file, args.key_type, args.verbose)

    database = AnyDatabase.for_key_type(args.key_type)

    if args.command:
        try:
            Session(database).process(args.command)
        except DatabaseError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        return 0

    return run_repl(Session(database))


if __name__ == "__main__":
    sys.exit(main())
