import pytest

from studentsystem.core.enums import StudentType
from studentsystem.core.exceptions import UnrecoverableConnectionError
from studentsystem.ui import StudentConsole


@pytest.fixture
def feed_input(monkeypatch):
    """Replace input() with a scripted sequence of answers."""
    def feed(*answers):
        remaining = iter(answers)
        monkeypatch.setattr("builtins.input", lambda prompt="": next(remaining))
    return feed


def test_run_prints_title_and_exits(repository, feed_input, capsys):
    feed_input("0")
    StudentConsole(repository).run()

    out = capsys.readouterr().out
    assert out.startswith("Student Administration System\nApplication started\n")
    assert "Goodbye!" in out


def test_add_student(repository, feed_input, capsys):
    feed_input("1", "Ada", "Lovelace", "1815", "1", "0", "y")
    StudentConsole(repository).run()

    assert "Student added with ID: 1" in capsys.readouterr().out
    student = repository.find_student_by_id(1)
    assert student.full_name == "Ada Lovelace"
    assert student.student_type is StudentType.TELEKOM


def test_add_student_defaults_to_cybersecurity(repository, feed_input):
    feed_input("Alan", "Turing", "1912", "7")
    StudentConsole(repository).add_student()
    assert repository.find_student_by_id(1).student_type is StudentType.CYBERSECURITY


def test_add_student_rejects_bad_input(repository, feed_input, capsys):
    console = StudentConsole(repository)

    feed_input("Ada", "Lovelace", "eighteen")
    console.add_student()
    feed_input("", "Lovelace", "1815", "1")
    console.add_student()

    out = capsys.readouterr().out
    assert "Birth year must be a number!" in out
    assert "First name and last name cannot be empty!" in out
    assert len(repository) == 0


def test_add_grade(sample_repository, feed_input, capsys):
    console = StudentConsole(sample_repository)

    feed_input("4", "3")
    console.add_grade()
    feed_input("4", "6")
    console.add_grade()
    feed_input("99", "3")
    console.add_grade()

    out = capsys.readouterr().out
    assert "Grade added" in out
    assert "Grade must be between 1-5!" in out
    assert "Student with ID 99 not found!" in out
    assert sample_repository.find_student_by_id(4).grades == [3]


def test_delete_student_requires_confirmation(sample_repository, feed_input, capsys):
    console = StudentConsole(sample_repository)

    feed_input("1", "n")
    console.delete_student()
    assert sample_repository.find_student_by_id(1) is not None

    feed_input("1", "y")
    console.delete_student()
    assert sample_repository.find_student_by_id(1) is None
    assert "Student deleted" in capsys.readouterr().out


def test_show_skill(sample_repository, feed_input, capsys):
    feed_input("3")
    StudentConsole(sample_repository).show_skill()

    out = capsys.readouterr().out.splitlines()
    assert out == ["--- Morse Code ---", "... .- -- ..- . .-..  -- --- .-. ... ."]


def test_sort_and_counts(sample_repository, capsys):
    console = StudentConsole(sample_repository)
    console.sort_by_last_name()
    console.show_counts()
    console.show_averages()

    out = capsys.readouterr().out
    assert out.index("Hopper") < out.index("Lovelace") < out.index("Morse") < out.index("Turing")
    assert "Total: 4" in out
    assert "Telecommunications: 3.25" in out
    assert "Cybersecurity: 4.00" in out


def test_save_and_reload(sample_repository, feed_input, capsys):
    console = StudentConsole(sample_repository)
    console.save_database()
    sample_repository.remove_student(1)
    console.reload_from_database()

    out = capsys.readouterr().out
    assert "Data saved to database" in out
    assert "Data loaded from database" in out
    assert len(sample_repository) == 4


def test_import_and_export(tmp_path, repository, feed_input, capsys):
    source = tmp_path / "in.txt"
    source.write_text("Ada;Lovelace;1815;telekom\nbad line\n", encoding="utf-8")
    target = tmp_path / "out.txt"
    console = StudentConsole(repository)

    feed_input(f'"{source}"')
    console.import_from_txt()
    feed_input("1", str(target))
    console.export_to_txt()

    out = capsys.readouterr().out
    assert "Imported 1 students" in out
    assert "Skipped 1 invalid lines" in out
    assert "Student exported to file" in out
    assert "Name: Ada Lovelace" in target.read_text(encoding="utf-8")


def test_errors_are_reported_and_loop_continues(repository, feed_input, capsys, tmp_path):
    feed_input("12", str(tmp_path / "missing.txt"), "42", "0")
    StudentConsole(repository).run()

    out = capsys.readouterr().out
    assert "Error: Error importing from file" in out
    assert "Invalid choice." in out


def test_exit_is_cancelled_when_changes_are_kept(repository, feed_input, capsys):
    repository.add_cybersecurity_student("Alan", "Turing", 1912)
    feed_input("0", "n", "0", "y")
    StudentConsole(repository).run()

    out = capsys.readouterr().out
    assert out.count("Goodbye!") == 1


def test_unrecoverable_connection_error_ends_the_loop(repository, feed_input, monkeypatch):
    def fail():
        raise UnrecoverableConnectionError("gone", attempts=5)

    monkeypatch.setattr(repository, "save_to_database", fail)
    feed_input("10")
    with pytest.raises(UnrecoverableConnectionError):
        StudentConsole(repository).run()
