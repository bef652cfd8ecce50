"""
Skill → capability grouping for profile cards.

Presentation only: used when the API does not send capabilities itself.
Matching is case-insensitive and accepts a substring either way
("React" ~ "React Native", "Postgres" ~ "PostgreSQL"). Every skill lands in
at most one group, the first one in CAPABILITY_ORDER that matches.
"""
from typing import Iterable, Optional, Union

from bixo.models.schemas import CandidateSkill

CAPABILITY_MAP: dict[str, list[str]] = {
    "Frontend": [
        "Angular", "React", "Next.js", "Vue", "Vue.js", "Svelte", "TypeScript",
        "JavaScript", "HTML", "CSS", "Tailwind", "SASS", "Redux", "GraphQL Client",
        "React Native", "Flutter", "Ionic", "Electron",
    ],
    "Backend": [
        "Node.js", "NestJS", ".NET", "C#", "Java", "Spring", "Spring Boot",
        "Python", "Django", "FastAPI", "Flask", "Ruby", "Rails", "Ruby on Rails",
        "Go", "Golang", "Rust", "PHP", "Laravel", "Express", "Koa", "GraphQL",
    ],
    "Infrastructure": [
        "PostgreSQL", "MySQL", "MongoDB", "Redis", "Elasticsearch", "DynamoDB",
        "AWS", "Azure", "GCP", "Google Cloud", "Docker", "Kubernetes", "K8s",
        "Terraform", "Ansible", "Jenkins", "GitHub Actions", "CI/CD", "Linux",
        "Nginx", "Apache", "Vercel", "Netlify", "Heroku",
    ],
    "Practices": [
        "System Design", "APIs", "REST", "REST APIs", "Microservices",
        "Payments", "Stripe", "Security", "OAuth", "Authentication",
        "Testing", "TDD", "Agile", "Scrum", "DevOps", "Architecture",
        "Performance", "Optimization", "Monitoring", "Observability",
    ],
    "Data & AI": [
        "Machine Learning", "ML", "AI", "Data Science", "TensorFlow", "PyTorch",
        "Pandas", "NumPy", "Data Engineering", "ETL", "Apache Spark", "Kafka",
        "Data Analysis", "SQL", "BigQuery", "Snowflake", "dbt",
    ],
    "Mobile": [
        "iOS", "Swift", "SwiftUI", "Android", "Kotlin", "React Native", "Flutter",
        "Mobile Development", "Objective-C", "Xamarin",
    ],
}

CAPABILITY_ORDER: list[str] = list(CAPABILITY_MAP)


def _matches(skill: str, mapped: str) -> bool:
    skill, mapped = skill.lower(), mapped.lower()
    return skill == mapped or mapped in skill or skill in mapped


def derive_capabilities(skills: Iterable[Union[str, CandidateSkill]]) -> dict[str, list[str]]:
    """Group skill names into capability groups; empty groups are omitted."""
    names = [s if isinstance(s, str) else s.skill_name for s in skills]
    names = [n for n in names if n and n.strip()]

    capabilities: dict[str, list[str]] = {}
    assigned: set[str] = set()

    for capability in CAPABILITY_ORDER:
        matching = []
        for skill in names:
            if skill.lower() in assigned:
                continue
            if any(_matches(skill, mapped) for mapped in CAPABILITY_MAP[capability]):
                matching.append(skill)
                assigned.add(skill.lower())
        if matching:
            capabilities[capability] = matching

    return capabilities


def has_capabilities(capabilities: Optional[dict[str, list[str]]]) -> bool:
    if not capabilities:
        return False
    return any(skills for skills in capabilities.values())
