import pytest

from docs_mirror.validator import validate_path


@pytest.mark.parametrize(
    "path",
    [
        "/en/docs/claude-code/overview",
        "/en/docs/claude-code/sdk/sdk-python",
        "/en/docs/claude-code/github_actions.v2",
    ],
)
def test_validate_path_accepts_docs_paths(path: str) -> None:
    assert validate_path(path)


@pytest.mark.parametrize(
    "path",
    [
        "/en/docs/claude-code/",
        "/en/docs/claude-code/quickstart#setup",
        "/en/docs/claude-code/what is this",
        "/en/docs/claude-code/overview?x=1",
        "/en/docs/other/overview",
        "https://docs.anthropic.com/en/docs/claude-code/overview",
        "/en/docs/claude-code/overview\n",
        "",
    ],
)
def test_validate_path_rejects_everything_else(path: str) -> None:
    assert not validate_path(path)


def test_validate_path_uses_custom_prefix() -> None:
    assert validate_path("/docs/guide", prefix="/docs/")
    assert not validate_path("/en/docs/claude-code/overview", prefix="/docs/")
