# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-14
# Description: test_fuzzy_matcher.py
# -----------------------------------------------------------------------------
import pytest

from search.CRMFuzzyMatcher import (
    CONTACT_FIELD_WEIGHTS,
    SearchCandidate,
    clamp_threshold,
    rank_candidates,
    score_candidate,
    token_similarity,
    tokenize,
)


def _contact(cid, first, last=None, email=None, company=None, title=None):
    return SearchCandidate(
        id=cid,
        fields={
            "first_name": first,
            "last_name": last,
            "email": email,
            "company_name": company,
            "job_title": title,
        },
    )


def test_tokenize_lowercases_and_splits_on_whitespace():
    assert tokenize("  Alex   ACME Corp ") == ["alex", "acme", "corp"]
    assert tokenize(None) == []
    assert tokenize("") == []


def test_token_similarity_uses_partial_only_for_longer_tokens():
    assert token_similarity("alex", "alexa") == pytest.approx(1.0)
    # 2-char tokens never get the substring boost
    assert token_similarity("al", "alexa") < 1.0


def test_clamp_threshold():
    assert clamp_threshold(None) == 0.4
    assert clamp_threshold(-1) == 0.0
    assert clamp_threshold(3) == 1.0


def test_no_match_returns_none():
    c = _contact("1", "Maria", "Garcia")
    assert score_candidate(["zzzz"], c, CONTACT_FIELD_WEIGHTS, 0.4) is None
    assert score_candidate([], c, CONTACT_FIELD_WEIGHTS, 0.4) is None


def test_exact_first_name_scores_by_weight():
    c = _contact("1", "Alex", "Johnson")
    # single token, best field weight == max weight, similarity 1.0
    assert score_candidate(["alex"], c, CONTACT_FIELD_WEIGHTS, 0.4) == pytest.approx(0.0)


def test_alex_acme_prefers_contact_at_acme():
    alex = _contact("alex", "Alex", "Johnson", company="Acme Corp")
    alexa = _contact("alexa", "Alexa", "Brown")

    ranked = rank_candidates("Alex Acme", [alexa, alex], CONTACT_FIELD_WEIGHTS)

    assert [c.id for c, _ in ranked] == ["alex"]
    assert ranked[0][1] == pytest.approx(0.25)
    # half the query unmatched puts Alexa at 0.5, past the default threshold
    assert score_candidate(["alex", "acme"], alexa, CONTACT_FIELD_WEIGHTS, 0.4) is None


def test_candidate_scoring_above_threshold_is_excluded():
    alex = _contact("alex", "Alex", "Johnson", company="Acme")

    assert score_candidate(["alex"], alex, CONTACT_FIELD_WEIGHTS, 0.4) == pytest.approx(0.0)
    # "alex" still matches exactly, but three unmatched tokens leave the distance at 0.75
    assert rank_candidates("alex zebra quokka platypus", [alex], CONTACT_FIELD_WEIGHTS, 0.4) == []


def test_natural_language_question_does_not_fuzzy_match_names():
    candidates = [
        _contact("theo", "Theo", "Fromm"),
        _contact("sam", "Sam", "Meeks"),
        _contact("maria", "Maria", "Conner"),
    ]

    ranked = rank_candidates("who did I meet from the conference", candidates, CONTACT_FIELD_WEIGHTS)

    assert ranked == []


def test_short_stopwords_do_not_substring_match():
    # "the" is below the substring minimum, so it only gets the plain ratio
    assert token_similarity("the", "theodore") < 0.6
    assert token_similarity("theo", "theodore") == pytest.approx(1.0)


def test_threshold_zero_is_exact_only():
    exact = _contact("exact", "Jordan")
    near = _contact("near", "Jordin")

    ranked = rank_candidates("jordan", [near, exact], CONTACT_FIELD_WEIGHTS, threshold=0.0)

    assert [c.id for c, _ in ranked] == ["exact"]


def test_ties_keep_input_order():
    a = _contact("a", "Sam")
    b = _contact("b", "Sam")
    ranked = rank_candidates("sam", [a, b], CONTACT_FIELD_WEIGHTS)
    assert [c.id for c, _ in ranked] == ["a", "b"]


def test_fuzzy_search_is_scoped_to_user(container, user_id, other_user_id):
    acme = container.company_service.create(user_id, {"name": "Acme Corp"})
    container.contact_service.create(
        user_id, {"first_name": "Alex", "last_name": "Johnson", "company_id": acme["id"]}
    )
    container.contact_service.create(user_id, {"first_name": "Alexa", "last_name": "Brown"})
    container.contact_service.create(other_user_id, {"first_name": "Alex", "last_name": "Intruder"})

    results = container.fuzzy_matcher.fuzzy_search_contacts(user_id, "Alex Acme")

    assert [r["first_name"] for r in results] == ["Alex"]
    assert results[0]["company"]["name"] == "Acme Corp"
    assert all("score" in r for r in results)


def test_fuzzy_company_search(container, user_id):
    container.company_service.create(user_id, {"name": "Globex", "industry": "Energy"})
    container.company_service.create(user_id, {"name": "Initech", "industry": "Software"})

    results = container.fuzzy_matcher.fuzzy_search_companies(user_id, "software")

    assert [r["name"] for r in results] == ["Initech"]
