from bixo.core.capabilities import CAPABILITY_ORDER, derive_capabilities, has_capabilities
from bixo.models.schemas import CandidateSkill


def test_groups_skills():
    caps = derive_capabilities(["React", "Python", "Docker", "Kafka", "Swift"])
    assert caps == {
        "Frontend": ["React"],
        "Backend": ["Python"],
        "Infrastructure": ["Docker"],
        "Data & AI": ["Kafka"],
        "Mobile": ["Swift"],
    }


def test_case_insensitive_and_substring():
    caps = derive_capabilities(["postgres", "KUBERNETES"])
    assert caps == {"Infrastructure": ["postgres", "KUBERNETES"]}


def test_each_skill_lands_in_one_group():
    # React Native is listed under Frontend and Mobile; Frontend comes first.
    caps = derive_capabilities(["React Native"])
    assert caps == {"Frontend": ["React Native"]}


def test_accepts_candidate_skills():
    skills = [CandidateSkill(id="1", skill_name="Django"), CandidateSkill(id="2", skill_name="Terraform")]
    assert derive_capabilities(skills) == {"Backend": ["Django"], "Infrastructure": ["Terraform"]}


def test_unknown_and_blank_skills_are_dropped():
    assert derive_capabilities(["Underwater basket weaving", "", "  "]) == {}


def test_has_capabilities():
    assert has_capabilities({"Backend": ["Python"]})
    assert not has_capabilities({"Backend": []})
    assert not has_capabilities(None)


def test_order():
    assert CAPABILITY_ORDER == ["Frontend", "Backend", "Infrastructure", "Practices", "Data & AI", "Mobile"]
