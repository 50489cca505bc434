from pathlib import Path

import pytest

PYPROJECT = Path(__file__).resolve().parents[1] / "pyproject.toml"

# Distribution names of every third-party library imported under src/gatekeep.
RUNTIME_DISTRIBUTIONS = [
    "fastapi",
    "uvicorn",
    "jinja2",
    "python-multipart",
    "argon2-cffi",
    "itsdangerous",
    "pydantic",
    "sqlalchemy",
    "python-dotenv",
]


@pytest.mark.parametrize("name", RUNTIME_DISTRIBUTIONS)
def test_runtime_dependency_is_declared(name):
    text = PYPROJECT.read_text(encoding="utf-8")
    assert f'"{name}>=' in text
