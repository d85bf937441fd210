"""Tests for the talent-scorer CLI."""

import json

from click.testing import CliRunner

from talent_scorer.cli import main


def score_args(sample_dir, *extra):
    return [
        "score",
        "-b", str(sample_dir / "questions_pro.json"),
        "-c", str(sample_dir / "careers_pro.json"),
        "-a", str(sample_dir / "answers_pro.json"),
        *extra,
    ]


def traditional_args(sample_dir, *extra):
    return [
        "traditional",
        "-m", str(sample_dir / "intelligences.json"),
        "-r", str(sample_dir / "interests.json"),
        "--mi-answers", str(sample_dir / "answers_intelligences.json"),
        "--ria-answers", str(sample_dir / "answers_interests.json"),
        *extra,
    ]


class TestScoreCommand:
    """Tests for `talent-scorer score`."""

    def test_json_output(self, sample_dir):
        runner = CliRunner()
        result = runner.invoke(main, score_args(sample_dir, "-j"))

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["top_islands"] == ["CC", "FE", "TP"]
        assert data["personality"]["polarity"]["code"] == "ISTP"

    def test_formatted_output(self, sample_dir):
        runner = CliRunner()
        result = runner.invoke(main, score_args(sample_dir))

        assert result.exit_code == 0, result.output
        assert "Scoring Summary" in result.output
        assert "Content Creator" in result.output

    def test_writes_out_file(self, sample_dir, tmp_path):
        out = tmp_path / "result.json"
        runner = CliRunner()
        result = runner.invoke(main, score_args(sample_dir, "-o", str(out)))

        assert result.exit_code == 0, result.output
        assert json.loads(out.read_text(encoding="utf-8"))["islands"]["CC"] == 98

    def test_with_traditional_scores(self, sample_dir, tmp_path):
        free = tmp_path / "free.json"
        runner = CliRunner()
        first = runner.invoke(main, traditional_args(sample_dir, "-j", "-o", str(free)))
        assert first.exit_code == 0, first.output

        result = runner.invoke(main, score_args(sample_dir, "-t", str(free), "-j"))

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["traditional_present"] is True
        assert data["islands"]["CC"] == 82

    def test_bad_bank_exits_with_error(self, sample_dir, tmp_path):
        bank = tmp_path / "bank.json"
        bank.write_text("{", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(main, [
            "score", "-b", str(bank),
            "-c", str(sample_dir / "careers_pro.json"),
            "-a", str(sample_dir / "answers_pro.json"),
        ])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_requires_answers(self, sample_dir):
        runner = CliRunner()
        result = runner.invoke(main, [
            "score",
            "-b", str(sample_dir / "questions_pro.json"),
            "-c", str(sample_dir / "careers_pro.json"),
        ])
        assert result.exit_code != 0


class TestTraditionalCommand:
    """Tests for `talent-scorer traditional`."""

    def test_json_output(self, sample_dir):
        runner = CliRunner()
        result = runner.invoke(main, traditional_args(sample_dir, "-j"))

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["top_interests"] == ["I", "A", "E"]
        assert data["intelligences"]["Linguistic"] == 50

    def test_formatted_output(self, sample_dir):
        runner = CliRunner()
        result = runner.invoke(main, traditional_args(sample_dir))

        assert result.exit_code == 0, result.output
        assert "IAE" in result.output


class TestValidateCommand:
    """Tests for `talent-scorer validate`."""

    def test_valid_files(self, sample_dir):
        runner = CliRunner()
        result = runner.invoke(main, [
            "validate",
            "-b", str(sample_dir / "questions_pro.json"),
            "-c", str(sample_dir / "careers_pro.json"),
        ])

        assert result.exit_code == 0
        assert "Bank valid" in result.output
        assert "Catalog valid" in result.output

    def test_invalid_catalog(self, tmp_path):
        catalog = tmp_path / "careers.json"
        catalog.write_text(json.dumps({"CC": []}), encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(main, ["validate", "-c", str(catalog)])

        assert result.exit_code == 1
        assert "Catalog invalid" in result.output

    def test_nothing_to_validate(self):
        runner = CliRunner()
        result = runner.invoke(main, ["validate"])
        assert result.exit_code == 0
        assert "Please specify" in result.output


class TestInspectCommand:
    """Tests for `talent-scorer inspect`."""

    def test_lists_islands(self, sample_dir):
        runner = CliRunner()
        result = runner.invoke(main, ["inspect", "-c", str(sample_dir / "careers_pro.json")])

        assert result.exit_code == 0, result.output
        assert "Total Records: 10" in result.output
        assert "PG" in result.output

    def test_island_records(self, sample_dir):
        runner = CliRunner()
        result = runner.invoke(main, [
            "inspect", "-c", str(sample_dir / "careers_pro.json"), "--island", "TP",
        ])

        assert result.exit_code == 0, result.output
        assert "Data Analyst" in result.output

    def test_unknown_island(self, sample_dir):
        runner = CliRunner()
        result = runner.invoke(main, [
            "inspect", "-c", str(sample_dir / "careers_pro.json"), "--island", "XX",
        ])
        assert "No records for island" in result.output


class TestInitConfigCommand:
    """Tests for `talent-scorer init-config`."""

    def test_creates_file(self, tmp_path):
        out = tmp_path / "scorer-config.yaml"
        runner = CliRunner()
        result = runner.invoke(main, ["init-config", "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert out.exists()

    def test_refuses_to_overwrite(self, tmp_path):
        out = tmp_path / "scorer-config.yaml"
        out.write_text("{}", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(main, ["init-config", "-o", str(out)])

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_config_option_is_applied(self, sample_dir, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("ranking:\n  max_recommendations: 2\n", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(main, ["--config", str(config), *score_args(sample_dir, "-j")])

        assert result.exit_code == 0, result.output
        assert len(json.loads(result.output)["recommendations"]) == 2


def test_version():
    runner = CliRunner()
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "talent-scorer" in result.output
