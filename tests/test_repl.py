"""Tests for sessions, scripts and the command-line entry point."""

import pytest

from memtables.database import AnyDatabase
from memtables.errors import (
    InvalidPathError,
    QuerySyntaxError,
    ScriptIOError,
    TableNotFoundError,
)
from memtables.repl import Session, main, run_file


@pytest.fixture
def session():
    """A session over an int-keyed database that collects its output."""
    output = []
    s = Session(AnyDatabase.for_key_type("int"), echo=output.append)
    s.output = output
    return s


class TestSession:
    """Tests for statement processing and history."""

    def test_process_echoes_result(self, session):
        """Test that results are echoed and statements recorded."""
        session.process("CREATE t KEY id FIELDS id:Int, name:String")
        session.process('INSERT id=1, name="a" INTO t')
        session.process("SELECT name FROM t")

        assert session.output == ["Table t created.", "Record inserted", "a"]
        assert session.history == [
            "CREATE t KEY id FIELDS id:Int, name:String",
            'INSERT id=1, name="a" INTO t',
            "SELECT name FROM t",
        ]

    def test_process_returns_messages(self, session):
        """process returns the messages it echoed."""
        assert session.process("CREATE t KEY id FIELDS id:Int") == ["Table t created."]
        assert session.process("SELECT id FROM t") == [""]
        assert session.output == ["Table t created.", ""]

    def test_history_is_canonical(self, session):
        """The history records the canonical form of each statement."""
        session.process("CREATE t KEY id FIELDS id : Int ,  v:Float")
        session.process("INSERT id=1,v=2.50 INTO t")

        assert session.history == [
            "CREATE t KEY id FIELDS id:Int, v:Float",
            "INSERT id=1, v=2.5 INTO t",
        ]

    def test_failed_statement_not_recorded(self, session):
        """Failing statements leave the history unchanged."""
        with pytest.raises(TableNotFoundError):
            session.process("SELECT a FROM missing")
        with pytest.raises(QuerySyntaxError):
            session.process("SELECT FROM")

        assert session.history == []

    def test_save_history(self, session, tmp_path):
        """SAVE_AS writes the history but is not itself recorded."""
        path = tmp_path / "history.txt"
        session.process("CREATE t KEY id FIELDS id:Int")
        session.process("INSERT id=1 INTO t")
        session.process(f"SAVE_AS {path}")

        assert path.read_text() == "CREATE t KEY id FIELDS id:Int\nINSERT id=1 INTO t"
        assert session.output[-1] == f"Saved history to: {path}"
        assert len(session.history) == 2

    def test_save_to_unwritable_path(self, session, tmp_path):
        """Test saving into a directory that does not exist."""
        with pytest.raises(ScriptIOError):
            session.process(f"SAVE_AS {tmp_path / 'missing' / 'out.txt'}")

    def test_save_empty_path(self, session):
        """Test saving to an empty quoted path."""
        with pytest.raises(InvalidPathError):
            session.process('SAVE_AS ""')

    def test_replay(self, session, tmp_path):
        """READ_FROM runs every non-blank line and echoes it first."""
        script = tmp_path / "init.txt"
        script.write_text("CREATE t KEY id FIELDS id:Int\n\n  INSERT id=5 INTO t  \n")

        messages = session.process(f"READ_FROM {script}")
        session.process("SELECT id FROM t")

        assert messages == session.output[:4]
        assert session.output == [
            "FILE> CREATE t KEY id FIELDS id:Int",
            "Table t created.",
            "FILE> INSERT id=5 INTO t",
            "Record inserted",
            "5",
        ]
        assert session.history[:2] == ["CREATE t KEY id FIELDS id:Int", "INSERT id=5 INTO t"]

    def test_save_then_replay_rebuilds_state(self, session, tmp_path):
        """A saved history replayed into a fresh session gives the same tables."""
        path = tmp_path / "dump.txt"
        session.process("CREATE t KEY id FIELDS id:Int, v:Float")
        session.process("INSERT id=2, v=0.5 INTO t")
        session.process("INSERT id=1, v=1.5 INTO t")
        session.process("DELETE 2 FROM t")
        session.process(f"SAVE_AS {path}")

        output = []
        fresh = Session(AnyDatabase.for_key_type("int"), echo=output.append)
        fresh.process(f"READ_FROM {path}")
        fresh.process("SELECT id, v FROM t")

        assert output[-1] == "1, 1.5"

    def test_replay_stops_at_first_error(self, session, tmp_path):
        """Statements before the failing line stay applied."""
        script = tmp_path / "bad.txt"
        script.write_text("CREATE t KEY id FIELDS id:Int\nINSERT id=1 INTO nope\nINSERT id=2 INTO t\n")

        with pytest.raises(TableNotFoundError):
            session.process(f"READ_FROM {script}")

        assert session.history == ["CREATE t KEY id FIELDS id:Int"]
        assert "FILE> INSERT id=2 INTO t" not in session.output

    def test_replay_missing_file(self, session, tmp_path):
        """Test reading a file that does not exist."""
        with pytest.raises(ScriptIOError):
            session.process(f"READ_FROM {tmp_path / 'nope.txt'}")

    def test_replay_recursion(self, session, tmp_path):
        """A script that reads itself is rejected."""
        script = tmp_path / "loop.txt"
        script.write_text(f"READ_FROM {script}\n")

        with pytest.raises(InvalidPathError):
            session.process(f"READ_FROM {script}")


class TestRunFile:
    """Tests for running a script file."""

    def test_run_file(self, tmp_path, capsys):
        """Test executing a script and printing results."""
        script = tmp_path / "script.txt"
        script.write_text("CREATE t KEY id FIELDS id:Int\nINSERT id=3 INTO t\nSELECT id FROM t\n")

        assert run_file(script, key_type="int") == 0

        captured = capsys.readouterr()
        assert captured.out.splitlines() == ["Table t created.", "Record inserted", "3"]

    def test_run_file_verbose(self, tmp_path, capsys):
        """Verbose mode also prints each statement."""
        script = tmp_path / "script.txt"
        script.write_text("CREATE t KEY id FIELDS id:Int\n")

        assert run_file(script, key_type="int", verbose=True) == 0
        assert "FILE> CREATE t KEY id FIELDS id:Int" in capsys.readouterr().out

    def test_run_file_error(self, tmp_path, capsys):
        """Test that a failing script returns 1 and reports the error."""
        script = tmp_path / "script.txt"
        script.write_text("SELECT id FROM t\n")

        assert run_file(script) == 1
        assert "Error: Table 't' not found." in capsys.readouterr().err


class TestMain:
    """Tests for the command-line entry point."""

    def test_command(self, capsys):
        """Test running a single statement."""
        assert main(["-k", "int", "-c", "CREATE t KEY id FIELDS id:Int"]) == 0
        assert capsys.readouterr().out.strip() == "Table t created."

    def test_command_error(self, capsys):
        """Test a single statement that fails."""
        assert main(["-c", "SELECT a FROM t"]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_file(self, tmp_path, capsys):
        """Test running a script with a string key type."""
        script = tmp_path / "script.txt"
        script.write_text('CREATE t KEY name FIELDS name:String\nINSERT name="x" INTO t\n')

        assert main(["-f", str(script)]) == 0
        assert capsys.readouterr().out.splitlines() == ["Table t created.", "Record inserted"]

    def test_missing_file(self, tmp_path, capsys):
        """Test a script path that does not exist."""
        assert main(["-f", str(tmp_path / "nope.txt")]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_unknown_key_type(self):
        """argparse rejects key types other than int and string."""
        with pytest.raises(SystemExit):
            main(["-k", "uuid", "-c", "SELECT a FROM t"])
