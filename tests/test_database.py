import pytest

from database import ScoreDatabase, ScoreRecord, ScoreServiceError, rank_scores


@pytest.fixture
def db(tmp_path):
    db = ScoreDatabase(str(tmp_path / "scores.db"))
    yield db
    db.close()


def test_harder_difficulty_outranks_higher_score():
    records = [ScoreRecord("a", 50, "hard"),
               ScoreRecord("b", 90, "easy"),
               ScoreRecord("c", 40, "hard")]
    assert rank_scores(records) == [ScoreRecord("a", 50, "hard"),
                                    ScoreRecord("c", 40, "hard"),
                                    ScoreRecord("b", 90, "easy")]


def test_rank_orders_all_difficulties_and_limits():
    records = [ScoreRecord(f"u{i}", i, d)
               for i, d in enumerate(["easy", "medium", "hard"] * 5)]
    ranked = rank_scores(records, limit=10)
    assert len(ranked) == 10
    assert [r.difficulty for r in ranked] == ["hard"] * 5 + ["medium"] * 5
    assert [r.score for r in ranked[:5]] == [14, 11, 8, 5, 2]


def test_unknown_difficulty_ranks_last():
    records = [ScoreRecord("x", 999, "insane"), ScoreRecord("y", 1, "easy")]
    assert [r.username for r in rank_scores(records)] == ["y", "x"]


def test_submit_and_fetch(db):
    db.submit_score("alice", 12, "medium")
    db.submit_score("bob", 3, "hard")
    assert db.fetch_scores() == [ScoreRecord("alice", 12, "medium"),
                                 ScoreRecord("bob", 3, "hard")]
    assert db.fetch_top_scores()[0] == ScoreRecord("bob", 3, "hard")


def test_top_scores_capped_at_ten(db):
    for i in range(15):
        db.submit_score(f"p{i}", i, "easy")
    top = db.fetch_top_scores()
    assert len(top) == 10
    assert top[0].score == 14


def test_scores_persist_between_connections(tmp_path):
    path = str(tmp_path / "scores.db")
    first = ScoreDatabase(path)
    first.submit_score("alice", 7, "easy")
    first.close()

    second = ScoreDatabase(path)
    assert second.fetch_scores() == [ScoreRecord("alice", 7, "easy")]
    second.close()


def test_closed_database_raises_service_error(db):
    db.close()
    with pytest.raises(ScoreServiceError):
        db.submit_score("alice", 1, "easy")
    with pytest.raises(ScoreServiceError):
        db.fetch_scores()


def test_unopenable_path_raises_service_error(tmp_path):
    with pytest.raises(ScoreServiceError):
        ScoreDatabase(str(tmp_path / "missing" / "dir" / "scores.db"))
