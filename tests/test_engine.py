"""End-to-end tests for the Scoring Engine against the sample data."""

import pytest

from question_bank.loader import load_answer_vector
from talent_scorer.config import ModuleKeysConfig, ScorerConfig
from talent_scorer.engine import ScoringEngine, validate_bank, validate_catalog
from talent_scorer.exceptions import (
    CatalogLoadError,
    EngineNotReadyError,
    QuestionBankLoadError,
    TalentScorerError,
)
from talent_scorer.schema import QuestionBank, ScoringResult, TraditionalProfile


@pytest.fixture
def engine(sample_dir):
    engine = ScoringEngine()
    engine.load_pro_bank(sample_dir / "questions_pro.json")
    engine.load_catalog(sample_dir / "careers_pro.json")
    engine.load_intelligence_bank(sample_dir / "intelligences.json")
    engine.load_interest_bank(sample_dir / "interests.json")
    return engine


@pytest.fixture
def pro_answers(sample_dir):
    return load_answer_vector(sample_dir / "answers_pro.json")


@pytest.fixture
def free_profile(engine, sample_dir):
    return engine.score_traditional(
        load_answer_vector(sample_dir / "answers_intelligences.json"),
        load_answer_vector(sample_dir / "answers_interests.json"),
    )


class TestTraditional:
    """Tests for free-tier scoring."""

    def test_intelligences(self, free_profile):
        assert free_profile.intelligences == {"Linguistic": 50, "Logical": 50, "Spatial": 0}

    def test_interests_always_have_every_type(self, free_profile):
        assert free_profile.interests == {"R": 0, "I": 100, "A": 100, "S": 0, "E": 100, "C": 0}

    def test_top_interests(self, free_profile):
        assert free_profile.top_interests == ["I", "A", "E"]
        assert free_profile.has_data

    def test_no_answers(self, engine):
        profile = engine.score_traditional(None, [])
        assert set(profile.intelligences.values()) == {0}
        assert set(profile.interests.values()) == {0}
        assert not profile.has_data

    def test_requires_banks(self):
        with pytest.raises(EngineNotReadyError, match="load_intelligence_bank"):
            ScoringEngine().score_traditional([], [])


class TestProScoring:
    """Tests for pro-tier scoring without free-tier data."""

    def test_meta_scores(self, engine, pro_answers):
        result = engine.score(pro_answers)
        assert result.meta == {"CQ": 83, "XQ": 100, "DQ": 67, "FQ": 33, "AQ": 67, "SEQ": 0}

    def test_raw_island_scores(self, engine, pro_answers):
        result = engine.score(pro_answers)
        assert result.islands_raw == {
            "CC": 100, "EL": 0, "TP": 67, "HL": 33, "SU": 0, "FF": 0, "FE": 100, "PG": 0,
        }

    def test_fused_island_scores(self, engine, pro_answers):
        result = engine.score(pro_answers)
        assert result.islands == {
            "CC": 98, "EL": 7, "TP": 66, "HL": 34, "SU": 4, "FF": 4, "FE": 98, "PG": 7,
        }
        assert result.traditional_present is False

    def test_top_islands_break_ties_by_declaration_order(self, engine, pro_answers):
        assert engine.score(pro_answers).top_islands == ["CC", "FE", "TP"]

    def test_recommendations(self, engine, pro_answers):
        result = engine.score(pro_answers)

        assert [r.record.title.en for r in result.recommendations] == [
            "Content Creator",
            "XR Experience Designer",
            "Indie Game Studio",
            "Machine Learning Engineer",
            "Data Analyst",
        ]
        assert result.recommendations[0].match_score == pytest.approx(93.2)
        assert result.recommendations[-1].match_score == pytest.approx(68.7)

    def test_personality(self, engine, pro_answers):
        personality = engine.score(pro_answers).personality

        assert personality.big5 == {"O": 67, "C": 33}
        assert personality.enneagram == {"E1": 100}
        assert personality.composite == {"growth": 100}
        assert personality.mbti["EI-I"] == 100
        assert personality.mbti["JP-J"] == 0
        assert personality.polarity.code == "ISTP"

    def test_breakdown_matches_fused_scores(self, engine, pro_answers):
        result = engine.score(pro_answers)
        assert {code: b.fused for code, b in result.island_breakdown.items()} == result.islands

    def test_rerun_is_identical(self, engine, pro_answers):
        first = engine.score(pro_answers).model_dump_json()
        second = engine.score(list(pro_answers)).model_dump_json()
        assert first == second

    def test_answers_are_not_mutated(self, engine, pro_answers):
        snapshot = list(pro_answers)
        engine.score(pro_answers)
        assert pro_answers == snapshot


class TestTraditionalFusion:
    """Tests for pro scoring with free-tier data."""

    def test_profile_input(self, engine, pro_answers, free_profile):
        result = engine.score(pro_answers, traditional=free_profile)

        assert result.traditional_present is True
        # CC <- A, I = 100; intelligence avg = 33.3
        assert result.island_breakdown["CC"].traditional_core == pytest.approx(60 + 0.4 * 100 / 3)
        assert result.islands["CC"] == 82

    def test_mapping_input(self, engine, pro_answers, free_profile):
        as_profile = engine.score(pro_answers, traditional=free_profile)
        as_mapping = engine.score(pro_answers, traditional=free_profile.model_dump())
        assert as_profile.islands == as_mapping.islands

    def test_all_zero_mapping_uses_fallback(self, engine, pro_answers):
        without = engine.score(pro_answers)
        zeros = engine.score(pro_answers, traditional={"intelligences": {"Logical": 0}, "interests": {}})
        assert zeros.islands == without.islands
        assert zeros.traditional_present is False

    def test_unusable_traditional_input_is_ignored(self, engine, pro_answers):
        assert engine.score(pro_answers, traditional=[1, 2]).islands == engine.score(pro_answers).islands


class TestZeroInput:
    """An absent answer vector degrades to zero scores."""

    @pytest.mark.parametrize("answers", [[], None, "garbage", {"0": 1}])
    def test_every_score_zero(self, engine, answers):
        result = engine.score(answers)

        assert set(result.meta.values()) == {0}
        assert set(result.islands.values()) == {0}
        assert len(result.islands) == 8
        assert result.personality.polarity.code == "ESTJ"

    def test_ties_rank_first_declared_islands(self, engine):
        result = engine.score([])

        assert result.top_islands == ["CC", "EL", "TP"]
        assert [r.record.title.en for r in result.recommendations] == [
            "Machine Learning Engineer",
            "Content Creator",
            "Product Manager",
            "Data Analyst",
            "Indie Game Studio",
        ]

    def test_appended_absent_position(self, engine, pro_answers):
        base = engine.score(pro_answers)
        extended = engine.score(pro_answers + [None])
        assert base.model_dump() == extended.model_dump()


class TestReadiness:
    """Scoring before loading raises a clear error."""

    def test_requires_pro_bank(self, sample_dir):
        engine = ScoringEngine()
        engine.load_catalog(sample_dir / "careers_pro.json")
        with pytest.raises(EngineNotReadyError, match="load_pro_bank"):
            engine.score([])

    def test_requires_catalog(self, sample_dir):
        engine = ScoringEngine()
        engine.load_pro_bank(sample_dir / "questions_pro.json")
        with pytest.raises(EngineNotReadyError, match="load_catalog"):
            engine.score([])

    def test_bad_bank_raises_load_error(self, tmp_path):
        path = tmp_path / "bank.json"
        path.write_text("[", encoding="utf-8")
        with pytest.raises(QuestionBankLoadError):
            ScoringEngine().load_pro_bank(path)

    def test_load_errors_share_the_scorer_base(self, tmp_path):
        assert issubclass(QuestionBankLoadError, TalentScorerError)
        assert issubclass(CatalogLoadError, TalentScorerError)
        assert issubclass(EngineNotReadyError, TalentScorerError)

        path = tmp_path / "careers.json"
        path.write_text("[", encoding="utf-8")
        with pytest.raises(TalentScorerError):
            ScoringEngine().load_catalog(path)

    def test_one_handler_catches_every_scorer_failure(self, tmp_path):
        path = tmp_path / "bank.json"
        path.write_bytes(b"\xff")
        caught = []
        for action in (lambda: ScoringEngine().load_pro_bank(path), lambda: ScoringEngine().score([])):
            try:
                action()
            except TalentScorerError as e:
                caught.append(type(e))
        assert caught == [QuestionBankLoadError, EngineNotReadyError]


class TestObjectsAndConfig:
    """Banks can be passed as objects and module keys configured."""

    def test_bank_object(self, engine, pro_answers):
        other = ScoringEngine()
        other.load_pro_bank(engine.pro_bank)
        other.load_catalog(engine.catalog)
        assert isinstance(other.pro_bank, QuestionBank)
        assert other.score(pro_answers).islands == engine.score(pro_answers).islands

    def test_custom_module_keys(self, sample_dir):
        config = ScorerConfig(modules=ModuleKeysConfig(islands="big5"))
        engine = ScoringEngine(config)
        engine.load_pro_bank(sample_dir / "questions_pro.json")
        engine.load_catalog(sample_dir / "careers_pro.json")

        result = engine.score([])
        assert result.islands_raw == {"O": 0, "C": 0}

    def test_result_types(self, engine, pro_answers, free_profile):
        assert isinstance(free_profile, TraditionalProfile)
        assert isinstance(engine.score(pro_answers), ScoringResult)


class TestValidation:
    """Tests for the file validation helpers."""

    def test_sample_files_are_valid(self, sample_dir):
        assert validate_bank(sample_dir / "questions_pro.json")[0]
        assert validate_bank(sample_dir / "interests.json")[0]
        assert validate_catalog(sample_dir / "careers_pro.json")[0]

    def test_missing_file_is_invalid(self, tmp_path):
        is_valid, issues = validate_catalog(tmp_path / "nope.json")
        assert not is_valid
        assert issues
