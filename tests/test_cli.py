"""Tests for the command-line message renderer."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import structlog

from kolmessage.cli import build_parser, main, parse_assignments


@pytest.fixture(autouse=True)
def _reset_structlog() -> None:
    """main() points structlog at the captured stderr; undo it after each test."""
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def db(tmp_path: Path) -> str:
    return str(tmp_path / "presets.db")


class TestParser:
    def test_defaults(self) -> None:
        args = build_parser().parse_args([])
        assert args.output_format == "text"
        assert args.assignments == []
        assert args.db == "data/presets.db"

    def test_repeatable_set(self) -> None:
        args = build_parser().parse_args(["--set", "a=1", "--set", "b=2"])
        assert args.assignments == ["a=1", "b=2"]


class TestParseAssignments:
    def test_parses_pairs(self) -> None:
        assert parse_assignments(["bonusAmount=5000", "fanOffer=a=b"]) == {
            "bonusAmount": "5000",
            "fanOffer": "a=b",
        }

    def test_rejects_missing_equals(self) -> None:
        with pytest.raises(ValueError, match="Expected FIELD=VALUE"):
            parse_assignments(["bonusAmount"])

    def test_rejects_unknown_field(self) -> None:
        with pytest.raises(ValueError, match="Unknown field"):
            parse_assignments(["budget=1"])


class TestMain:
    def test_renders_default_template(self, db: str, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["--contact", "Amy", "--kol", "阿明", "--set", "endDate=2026-11-30", "--db", db])

        out = capsys.readouterr().out
        assert code == 0
        assert out.startswith("HI Amy，如剛剛討論，提供方案給 阿明 參考唷")
        assert "🔹初期合作至 2026-11-30" in out

    def test_preset_then_overrides(self, db: str, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(
            [
                "--contact", "Amy",
                "--kol", "阿明",
                "--preset", "B",
                "--set", "sendHandle=否",
                "--format", "json",
                "--db", db,
            ]
        )

        payload = json.loads(capsys.readouterr().out)
        assert code == 0
        assert payload["form"]["guaranteedMinimum"] == "25000"
        assert "，並提供 25,000 保底" in payload["message"]
        assert "免費的素材包" in payload["message"]

    def test_template_file(self, db: str, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        template = tmp_path / "offer.txt"
        template.write_text("{kolName} / {profitShare}\n", encoding="utf-8")

        code = main(["--contact", "Amy", "--kol", "阿明", "--template-file", str(template), "--db", db])

        assert code == 0
        assert capsys.readouterr().out == "阿明 / 15%\n"

    def test_missing_required_exits_1(self, db: str, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["--kol", "阿明", "--db", db])

        captured = capsys.readouterr()
        assert code == 1
        assert captured.out == ""
        assert "請填寫所有必填欄位" in captured.err

    def test_unknown_template_id_exits_1(self, db: str, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["--contact", "Amy", "--kol", "阿明", "--template-id", "nope", "--db", db])
        assert code == 1
        assert "沒有可用的訊息範本" in capsys.readouterr().err

    def test_bad_assignment_is_usage_error(self, db: str) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--contact", "Amy", "--kol", "阿明", "--set", "nope", "--db", db])
        assert exc_info.value.code == 2

    def test_unknown_preset_is_usage_error(self, db: str) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--contact", "Amy", "--kol", "阿明", "--preset", "Z", "--db", db])
        assert exc_info.value.code == 2
