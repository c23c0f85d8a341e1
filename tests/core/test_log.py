# tests/core/test_log.py
"""
Testes do SimpleLogger (log estruturado).

Os testes asseguram que:
- cada chamada produz um evento estruturado com origem, nível e mensagem
- a formatação estilo printf é aplicada aos argumentos
- eventos abaixo do nível configurado são descartados
- loggers derivados compartilham a mesma lista de eventos
"""

import pytest

from atlantis_planner.core.log import SimpleLogger


def test_structured_event():
    log = SimpleLogger(source="owner/repo#7")
    log.info("no %s file found", "atlantis.yaml")

    assert len(log.events) == 1
    ev = log.events[0]
    assert ev["source"] == "owner/repo#7"
    assert ev["level"] == "INFO"
    assert ev["message"] == "no atlantis.yaml file found"
    assert ev["timestamp"].endswith("+00:00")


def test_message_without_args_is_not_formatted():
    log = SimpleLogger(source="s")
    log.info("100% literal")
    assert log.messages() == ["100% literal"]


def test_level_filtering():
    log = SimpleLogger(source="s", level="WARN")
    log.debug("d")
    log.info("i")
    log.warn("w")
    log.err("e")
    assert [e["level"] for e in log.events] == ["WARN", "ERROR"]


def test_messages_by_level():
    log = SimpleLogger(source="s", level="DEBUG")
    log.debug("d")
    log.info("i")
    assert log.messages("DEBUG") == ["d"]
    assert log.messages() == ["d", "i"]


def test_bind_shares_events():
    parent = SimpleLogger(source="repo")
    child = parent.bind("repo/project1")
    child.info("hello")
    assert parent.events[-1]["source"] == "repo/project1"
    assert child.level == parent.level


def test_invalid_level_rejected():
    with pytest.raises(ValueError):
        SimpleLogger(source="s", level="TRACE")
    with pytest.raises(ValueError):
        SimpleLogger(source="s").log("TRACE", "x")
