# tests/core/config/test_parser_validator.py
"""
Testes do ParserValidator (leitura do `atlantis.yaml`).

Os testes asseguram que:
- a ausência do arquivo é sinalizada com `ConfigFileNotFoundError`
- YAML malformado, codificação inválida e raiz inválida são rejeitados
  com erros tipados
- números não citados chegam aos campos de texto como foram escritos
- erros de validação dos projetos são propagados sem modificação
- um arquivo completo é normalizado na forma canônica
"""

from pathlib import Path

import pytest
import yaml
from semver import Version

from atlantis_planner.core.config.errors import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    InvalidConfigRootTypeError,
)
from atlantis_planner.core.config.parser import ATLANTIS_YAML_FILENAME, ParserValidator
from atlantis_planner.core.config.valid import Autoplan, Config, Project, Stage, StepConfig, Workflow


def test_filename_constant():
    assert ATLANTIS_YAML_FILENAME == "atlantis.yaml"


def test_missing_file_raises_not_found(repo_dir: Path):
    with pytest.raises(ConfigFileNotFoundError) as exc_info:
        ParserValidator().read_config(repo_dir)
    assert isinstance(exc_info.value, FileNotFoundError)
    assert isinstance(exc_info.value, ConfigError)


def test_missing_repo_dir_raises_not_found(tmp_path: Path):
    with pytest.raises(ConfigFileNotFoundError):
        ParserValidator().read_config(tmp_path / "does-not-exist")


def test_empty_file_is_empty_config(repo_dir: Path, write_atlantis_yaml):
    write_atlantis_yaml("")
    assert ParserValidator().read_config(repo_dir) == Config()


def test_malformed_yaml_raises_parse_error(repo_dir: Path, write_atlantis_yaml):
    write_atlantis_yaml("projects:\n  - dir: [unclosed\n")
    with pytest.raises(ConfigParseError) as exc_info:
        ParserValidator().read_config(repo_dir)
    assert exc_info.value.__cause__ is not None


def test_list_root_is_rejected(repo_dir: Path, write_atlantis_yaml):
    write_atlantis_yaml("- dir: .\n")
    with pytest.raises(InvalidConfigRootTypeError):
        ParserValidator().read_config(repo_dir)


def test_validation_errors_propagate(repo_dir: Path, write_atlantis_yaml):
    write_atlantis_yaml(
        """
version: 2
projects:
- dir: ../escape
"""
    )
    with pytest.raises(ConfigValidationError) as exc_info:
        ParserValidator().read_config(repo_dir)
    assert exc_info.value.field == "projects[0].dir"


def test_directory_in_place_of_file_is_not_treated_as_missing(repo_dir: Path):
    (repo_dir / ATLANTIS_YAML_FILENAME).mkdir()
    with pytest.raises(OSError) as exc_info:
        ParserValidator().read_config(repo_dir)
    assert not isinstance(exc_info.value, FileNotFoundError)


def test_invalid_utf8_raises_parse_error(repo_dir: Path):
    (repo_dir / ATLANTIS_YAML_FILENAME).write_bytes(b"projects:\n- dir: \xff\xfe\n")
    with pytest.raises(ConfigParseError) as exc_info:
        ParserValidator().read_config(repo_dir)
    assert isinstance(exc_info.value.__cause__, yaml.YAMLError)


def test_unquoted_numbers_keep_their_text(repo_dir: Path, write_atlantis_yaml):
    write_atlantis_yaml(
        """
version: 2
projects:
- dir: .
  workspace: 2019
  terraform_version: 0.10
- dir: 10
  terraform_version: 0.12
"""
    )
    config = ParserValidator().read_config(repo_dir)

    assert config.version == 2
    first, second = config.projects
    assert first.workspace == "2019"
    assert type(first.workspace) is str
    # `0.10` lido como float viraria "0.1"
    assert first.terraform_version == Version.parse("0.10.0")
    assert second.dir == "10"
    assert second.terraform_version == Version.parse("0.12.0")


@pytest.mark.parametrize("content", ['version: "2"\n', "version: 2.0\n", "version: true\n"])
def test_version_must_be_an_unquoted_integer(content):
    with pytest.raises(ConfigValidationError) as exc_info:
        ParserValidator().parse(content)
    assert exc_info.value.field == "version"


def test_parse_accepts_bytes():
    config = ParserValidator().parse("projects:\n- dir: ação\n".encode("utf-8"))
    assert config.projects[0].dir == "ação"


def test_full_config_is_normalized(repo_dir: Path, write_atlantis_yaml):
    write_atlantis_yaml(
        """
version: 2
projects:
- name: staging-project
  dir: project1
  workspace: staging
  workflow: myworkflow
  terraform_version: 0.11.0
  autoplan:
    when_modified: ["*.tf", "../modules/**.tf"]
    enabled: false
  apply_requirements: [approved]
- dir: project2
workflows:
  myworkflow:
    plan:
      steps:
      - run: echo "starting plan"
      - init
      - plan:
          extra_args: ["-var", "foo=bar"]
    apply:
      steps:
      - apply
"""
    )

    config = ParserValidator().read_config(str(repo_dir))

    assert config == Config(
        version=2,
        projects=[
            Project(
                name="staging-project",
                dir="project1",
                workspace="staging",
                workflow="myworkflow",
                terraform_version=Version.parse("0.11.0"),
                autoplan=Autoplan(when_modified=["*.tf", "../modules/**.tf"], enabled=False),
                apply_requirements=["approved"],
            ),
            Project(dir="project2", workspace="default"),
        ],
        workflows={
            "myworkflow": Workflow(
                name="myworkflow",
                plan=Stage(
                    steps=[
                        StepConfig(step_type="run", run=["echo", "starting plan"]),
                        StepConfig(step_type="init"),
                        StepConfig(step_type="plan", extra_args=["-var", "foo=bar"]),
                    ]
                ),
                apply=Stage(steps=[StepConfig(step_type="apply")]),
            )
        },
    )


def test_parse_reads_fresh_content_each_call(repo_dir: Path, write_atlantis_yaml):
    parser = ParserValidator()
    write_atlantis_yaml("projects:\n- dir: a\n")
    assert [p.dir for p in parser.read_config(repo_dir).projects] == ["a"]
    write_atlantis_yaml("projects:\n- dir: b\n")
    assert [p.dir for p in parser.read_config(repo_dir).projects] == ["b"]
