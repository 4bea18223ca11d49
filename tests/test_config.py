import pydantic
import pytest

from studentdb_config import Settings


def test_defaults():
    s = Settings()
    assert s.PROJECT_NAME == "StudentDB Manager"
    assert s.DB_PATH.name == "students.db"
    assert s.ADD_DELAY_MS >= 0


def test_env_override(monkeypatch, tmp_path):
    monkeypatch.setenv("STUDENTDB_LOAD_DELAY_MS", "5")
    monkeypatch.setenv("STUDENTDB_DB_PATH", str(tmp_path / "x.db"))
    monkeypatch.setenv("STUDENTDB_LOG_LEVEL", "debug")
    s = Settings()
    assert s.LOAD_DELAY_MS == 5
    assert s.DB_PATH == tmp_path / "x.db"
    assert s.LOG_LEVEL == "DEBUG"


def test_negative_delay_rejected():
    with pytest.raises(pydantic.ValidationError):
        Settings(ADD_DELAY_MS=-1)
