import datetime as dt

import pytest

from warpgen.core.exceptions import OptionsError
from warpgen.core.models import ProjectOptions
from warpgen.environment.store import VariableStore
from warpgen.environment.variables import (
    build_store,
    file_extensions,
    generate_project_variables,
    project_variables,
)

ENV = {"USER": "alice", "GITHUB_USERNAME": "octo", "GITHUB_EMAIL": "alice@example.com"}


def test_name_variants():
    variables = project_variables("my-cool_app", "python", env=ENV)
    assert variables["PROJECT_NAME"] == "my-cool_app"
    assert variables["CLASS_NAME"] == "MyCoolApp"
    assert variables["CONSTANT_PREFIX"] == "MY_COOL_APP"
    assert variables["FUNCTION_PREFIX"] == "my_cool_app"
    assert variables["PACKAGE_NAME"] == "mycoolapp"
    assert variables["PYTHON_PACKAGE"] == "my_cool_app"
    assert variables["MODULE_NAME"] == "myCoolApp"
    assert variables["MENU_SLUG"] == "my-cool-app"
    assert variables["LOCALIZE_OBJECT"] == "myCoolAppObject"
    assert variables["NONCE_ACTION"] == "my-cool_app_nonce"


def test_author_and_github_from_env():
    variables = project_variables("demo", "node", env=ENV)
    assert variables["AUTHOR_NAME"] == "alice"
    assert variables["AUTHOR_EMAIL"] == "alice@example.com"
    assert variables["GITHUB_REPO_URL"] == "https://github.com/octo/demo"
    assert variables["GITHUB_CLONE_URL"] == "git@github.com:octo/demo.git"
    assert variables["LICENSE"] == "MIT"


def test_author_option_wins():
    options = ProjectOptions(author="Bob")
    assert project_variables("demo", "node", options, env=ENV)["AUTHOR_NAME"] == "Bob"


def test_feature_flags_from_options():
    options = ProjectOptions(docker=False, ci=False)
    variables = project_variables("demo", "python", options, env={})
    assert variables["USE_DOCKER"] == "false"
    assert variables["INCLUDE_CI"] == "false"
    assert variables["INCLUDE_TESTING"] == "true"
    assert variables["INCLUDE_DOCS"] == "true"


def test_dates_use_given_time():
    now = dt.datetime(2024, 3, 5, 14, 7, 9)
    variables = project_variables("demo", "python", env={}, now=now)
    assert variables["CURRENT_YEAR"] == "2024"
    assert variables["CURRENT_DATE"] == "2024-03-05"
    assert variables["CURRENT_DATETIME"] == "2024-03-05 14:07:09"


@pytest.mark.parametrize(
    "project_type, main_ext, config_file",
    [
        ("python", ".py", "setup.py"),
        ("node", ".js", "package.json"),
        ("wordpress-plugin", ".php", "composer.json"),
        ("php", ".php", "composer.json"),
    ],
)
def test_file_extensions(project_type, main_ext, config_file):
    extensions = file_extensions(project_type)
    assert extensions["MAIN_FILE_EXT"] == main_ext
    assert extensions["CONFIG_FILE"] == config_file


def test_unknown_type_has_no_extensions():
    assert file_extensions("rust") == {}
    assert "MAIN_FILE_EXT" not in project_variables("demo", "rust", env={})


def test_generated_text_loads_into_store():
    text = generate_project_variables("demo", "python", env=ENV)
    assert text.startswith("# ")
    store = VariableStore.load(text)
    assert store.get("PROJECT_NAME") == "demo"
    assert store.get("PROJECT_TYPE") == "python"


def test_build_store_overrides():
    store = build_store("demo", "python", env=ENV, overrides={"LICENSE": "Apache-2.0"})
    assert store.get("LICENSE") == "Apache-2.0"
    assert store.get("PYTHON_CLASS") == "Demo"


def test_build_store_folds_multiline_values():
    options = ProjectOptions(description="first line\nSECOND=injected")
    store = build_store("demo", "python", options, env={})
    assert store.get("PROJECT_DESCRIPTION") == "first line SECOND=injected"
    assert "SECOND" not in store


def test_options_from_json():
    options = ProjectOptions.from_json('{"description": "x", "docker": "false", "ci": true}')
    assert options.description == "x"
    assert options.docker is False
    assert options.ci is True
    assert options.testing is True


@pytest.mark.parametrize("text", ["{not json", "[1, 2]", '{"docker": "maybe"}'])
def test_options_from_json_rejects_bad_input(text):
    with pytest.raises(OptionsError):
        ProjectOptions.from_json(text)


def test_build_store_keeps_non_newline_separators():
    options = ProjectOptions(description="page\x0cbreak here")
    store = build_store("demo", "python", options, env={})
    assert store.get("PROJECT_DESCRIPTION") == "page\x0cbreak here"
