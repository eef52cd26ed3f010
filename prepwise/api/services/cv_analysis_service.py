# prepwise/api/services/cv_analysis_service.py
"""
Resume vs. job-description analysis for software engineering internships.

Each step asks the LLM first and falls back to keyword heuristics and a fixed
set of internship recommendations when the model is unavailable or its reply
cannot be used.
"""
from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from openai import OpenAIError

from prepwise.api.config import CV_CONFIG
from prepwise.api.models.skill_assessment import TechnologyCategory
from prepwise.api.utils import ai_utils
from prepwise.api.utils.common_utils import get_logger, round_half_up, sha256_hex, truncate

log = get_logger(__name__)


class CVValidationError(ValueError):
    """Resume or job description content that cannot be analysed."""


SOFTWARE_ENGINEERING_KEYWORDS = [
    # Programming languages
    "python", "java", "javascript", "typescript", "c++", "c#", "go", "rust", "swift", "kotlin", "scala", "ruby", "php",
    # Web
    "react", "angular", "vue", "nodejs", "express", "django", "flask", "spring", "html", "css", "bootstrap", "tailwind",
    # Mobile
    "android", "ios", "react native", "flutter", "xamarin", "swift ui",
    # Databases
    "mysql", "postgresql", "mongodb", "redis", "sqlite", "firebase", "dynamodb", "cassandra",
    # Cloud & DevOps
    "aws", "azure", "gcp", "docker", "kubernetes", "jenkins", "github actions", "terraform", "ansible",
    # Tools
    "git", "github", "gitlab", "jira", "confluence", "slack", "figma", "postman", "swagger",
    # Concepts
    "api", "rest", "graphql", "microservices", "agile", "scrum", "ci/cd", "testing", "unit testing",
    "integration testing",
    # Data / ML
    "machine learning", "data science", "tensorflow", "pytorch", "pandas", "numpy", "scikit-learn",
    # Intern-level
    "software development", "web development", "mobile development", "full stack", "frontend", "backend",
    "debugging",
]

NON_TECH_INDICATORS = [
    "medical", "doctor", "physician", "nurse", "healthcare", "hospital", "clinic", "patient",
    "law", "lawyer", "attorney", "legal", "court", "litigation", "paralegal",
    "teacher", "educator", "instructor", "professor", "school", "classroom", "curriculum",
    "retail", "sales associate", "cashier", "store manager", "customer service representative",
    "chef", "cook", "kitchen", "restaurant", "food service", "culinary",
    "accountant", "bookkeeper", "financial analyst", "audit", "tax preparation",
    "marketing coordinator", "social media manager", "content creator", "copywriter",
    "hr manager", "human resources", "recruiter", "talent acquisition",
    "administrative assistant", "secretary", "office manager", "receptionist",
    "warehouse", "logistics", "driver", "delivery", "shipping",
]

_RESUME_SECTIONS = ["education", "experience", "skills", "projects", "contact"]
_INTERNSHIP_WORDS = ["intern", "internship", "student", "entry level", "junior", "trainee"]
_SOFTWARE_WORDS = [
    "software", "developer", "engineer", "programming", "coding", "development",
    "python", "java", "javascript", "react", "node", "web", "mobile", "app",
]

NON_TECH_MESSAGE = (
    "This job description is not for a software engineering internship or technical role. "
    "Our resume analysis tool is specifically designed for software engineering internships and related "
    "technical positions requiring programming skills. Please provide a software engineering internship "
    "job description for accurate, industry-specific resume optimization recommendations."
)

DEFAULT_RECOMMENDATIONS: Dict[str, List[str]] = {
    "strengths": [
        "Educational foundation in computer science or related technical field",
        "Demonstrates learning aptitude and interest in software development",
        "Has academic exposure to programming concepts and problem-solving",
        "Shows initiative in pursuing technical skills and knowledge",
    ],
    "content_weaknesses": [
        "Missing specific programming languages commonly required for internships (Python, Java, JavaScript, C++)",
        "Lacks demonstrated coding projects with measurable impact or user engagement",
        "No visible GitHub portfolio showcasing coding abilities and project diversity",
        "Missing practical experience with web development frameworks (React, Angular, Vue.js)",
        "Insufficient evidence of database knowledge (SQL, NoSQL) and data manipulation skills",
        "Lacks demonstration of collaborative coding experience or version control usage (Git/GitHub)",
    ],
    "structure_weaknesses": [
        "Technical skills section not optimized for software engineering roles - should categorize languages, "
        "frameworks, and tools",
        "Missing essential professional links: GitHub profile, LinkedIn, and personal portfolio website",
        "Resume format not tailored for technical recruiting and ATS compatibility",
        "Project descriptions lack technical depth, specific technologies used, and quantified outcomes",
        "Contact information missing elements critical for tech recruiting (professional email, GitHub, LinkedIn)",
    ],
    "content_recommendations": [
        "Build 2-3 substantial coding projects: full-stack web application, mobile app, or API service with "
        "complete GitHub documentation",
        "Learn industry-standard technologies: master one backend language (Python/Java), one frontend framework "
        "(React/Vue), and database skills (SQL)",
        "Create measurable project impact: 'Built e-commerce site handling 500+ products', 'Developed mobile app "
        "with 4.5/5 user rating', 'Optimized database queries reducing load time by 60%'",
        "Add relevant computer science coursework: Data Structures & Algorithms, Software Engineering, Database "
        "Systems, Web Development, Computer Networks",
        "Gain practical development experience: contribute to open source projects, complete coding bootcamp "
        "modules, or freelance small development projects",
        "Pursue technical certifications: AWS Cloud Practitioner, Google Developer Certification, Meta Frontend "
        "Developer, or IBM Data Science certificates",
        "Build coding portfolio: solve 50+ LeetCode problems, participate in hackathons, or contribute to GitHub "
        "projects with documentation",
        "Add collaborative experience: pair programming projects, group software development coursework, or "
        "team-based hackathon participation",
    ],
    "structure_recommendations": [
        "Use technical resume format: Contact Information, Professional Summary, Education (with relevant "
        "coursework), Technical Skills, Projects, Experience sections",
        "Organize technical skills strategically: 'Programming Languages: Python, Java, JavaScript', 'Web "
        "Technologies: React, HTML/CSS, Node.js', 'Databases: MySQL, PostgreSQL', 'Tools: Git, Docker, VS Code'",
        "Add professional links prominently: GitHub profile (github.com/username), LinkedIn (/in/fullname), "
        "personal website or portfolio (yourname.github.io)",
        "Optimize for applicant tracking systems: use standard resume format, avoid graphics/tables, use "
        "consistent fonts (Calibri/Arial), maintain clear section hierarchy",
        "Structure project descriptions effectively: 'Project Name | Technologies Used | Brief description with "
        "specific impact | GitHub repository link | Live demo URL'",
        "Create compelling professional summary: 2-3 lines highlighting programming expertise, notable projects, "
        "and internship goals in software engineering",
        "Use technical action verbs throughout: 'Developed', 'Implemented', 'Architected', 'Optimized', "
        "'Collaborated' with quantified technical outcomes",
        "Ensure professional presentation: consistent formatting, appropriate white space, one-page length for "
        "students, professional email address format",
    ],
}

RECOMMENDATION_FIELDS = tuple(DEFAULT_RECOMMENDATIONS.keys())

NEXT_STEPS_SOFTWARE = [
    "Review detailed recommendations for each software engineering role",
    "Prioritize implementing content recommendations (technical skills, projects)",
    "Apply structure recommendations for better ATS compatibility",
    "Consider generating a SWOT analysis for comprehensive career planning",
]
NEXT_STEPS_NON_TECH = [
    "Please provide job descriptions specifically for software engineering internships",
    "Ensure job postings mention programming languages, development frameworks, or technical skills",
    "Look for internship positions at tech companies or software development roles",
]


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ------------------------------------------------------------------
# Validation / text helpers
# ------------------------------------------------------------------
def create_resume_hash(resume_text: str) -> str:
    return sha256_hex((resume_text or "").strip())


def validate_inputs(resume_text: Any, job_desc: Any) -> None:
    if not resume_text or not job_desc or not isinstance(resume_text, str) or not isinstance(job_desc, str):
        raise CVValidationError("Both inputs must be non-empty strings")
    limit = CV_CONFIG["MAX_INPUT_CHARS"]
    if len(resume_text) > limit or len(job_desc) > limit:
        raise CVValidationError("Input text too long (max 50,000 characters)")


def validate_resume_content(resume_text: str) -> bool:
    if len(resume_text or "") < CV_CONFIG["MIN_RESUME_CHARS"]:
        raise CVValidationError("Resume content too short. Please ensure the PDF contains readable text.")
    lower = resume_text.lower()
    if not any(section in lower for section in _RESUME_SECTIONS):
        log.warning("Resume may be missing standard sections")
    return True


def validate_job_description(job_desc: str) -> Dict[str, bool]:
    if len(job_desc or "") < CV_CONFIG["MIN_JD_CHARS"]:
        raise CVValidationError("Job description too short. Please provide a detailed job posting.")
    lower = job_desc.lower()
    is_internship = any(w in lower for w in _INTERNSHIP_WORDS)
    is_software = any(w in lower for w in _SOFTWARE_WORDS)
    return {"is_internship": is_internship, "is_software": is_software, "is_relevant": is_internship and is_software}


def convert_markdown_to_html(text: str) -> str:
    text = re.sub(r"\*\*(.*?)\*\*", r"<strong>\1</strong>", text or "")
    return text.replace("\n\n", "<br/><br/>").replace("\n", "<br/>")


def strip_html_to_text(markup: str) -> str:
    text = re.sub(r"<br\s*/?>", "\n", markup or "", flags=re.I)
    text = re.sub(r"<[^>]*>", "", text)
    text = text.replace("&nbsp;", " ").replace("&amp;", "&").replace("&lt;", "<").replace("&gt;", ">")
    return text.strip()


def _has_non_tech_indicator(text_lower: str) -> bool:
    return any(ind in text_lower for ind in NON_TECH_INDICATORS)


def _has_software_keyword(text_lower: str) -> bool:
    return any(kw in text_lower for kw in SOFTWARE_ENGINEERING_KEYWORDS)


def looks_non_tech(job_desc: str) -> bool:
    lower = (job_desc or "").lower()
    return _has_non_tech_indicator(lower) and not _has_software_keyword(lower)


# ------------------------------------------------------------------
# Similarity
# ------------------------------------------------------------------
def fallback_similarity(resume_text: str, job_desc: str) -> float:
    jd_lower = job_desc.lower()
    resume_lower = resume_text.lower()

    if _has_non_tech_indicator(jd_lower):
        return 0.0

    required = [kw for kw in SOFTWARE_ENGINEERING_KEYWORDS if kw in jd_lower]
    if not required:
        return 0.1
    matched = [kw for kw in required if kw in resume_lower]
    return min(0.8, len(matched) / len(required))


def _similarity_prompt(resume_text: str, job_desc: str) -> str:
    limit = CV_CONFIG["SIMILARITY_TRUNCATE"]
    return f"""You are an expert software engineering internship recruiter.

First decide whether the job description is for a SOFTWARE ENGINEERING INTERNSHIP or a similar technical role
(any role requiring programming, coding or software development skills).
If it is NOT, return: 0

Otherwise evaluate the candidate:
1. Programming languages (40%)
2. Technical projects (25%)
3. Foundational CS knowledge (20%)
4. Learning aptitude (10%)
5. Educational background (5%)

Resume:
{truncate(resume_text, limit, "...")}

Job Description:
{truncate(job_desc, limit, "...")}

Return ONLY a decimal between 0.0 and 1.0.

Score:"""


def get_similarity_score(resume_text: str, job_desc: str) -> float:
    validate_inputs(resume_text, job_desc)

    if looks_non_tech(job_desc):
        log.info("Non-tech role detected, returning 0 similarity")
        return 0.0

    if not ai_utils.is_ready():
        return fallback_similarity(resume_text, job_desc)

    try:
        raw = ai_utils.chat(
            [{"role": "user", "content": _similarity_prompt(resume_text, job_desc)}],
            temperature=CV_CONFIG["TEMPERATURE_SIMILARITY"],
            max_tokens=CV_CONFIG["MAX_TOKENS_SIMILARITY"],
        )
        score = float(raw.strip())
    except ValueError:
        log.warning("Invalid similarity score returned, using fallback calculation")
        return fallback_similarity(resume_text, job_desc)
    except (OpenAIError, RuntimeError) as e:
        log.error(f"Similarity scoring failed: {e}")
        return fallback_similarity(resume_text, job_desc)

    if not 0 <= score <= 1:
        log.warning(f"Similarity score out of range ({score}), using fallback calculation")
        return fallback_similarity(resume_text, job_desc)
    return score


def match_percentage(similarity: float, is_non_tech_role: bool = False) -> int:
    if is_non_tech_role or similarity == 0:
        return 0
    s = similarity
    if s < 0.2:
        pct = s * 25
    elif s < 0.4:
        pct = 5 + (s - 0.2) * 50
    elif s < 0.6:
        pct = 15 + (s - 0.4) * 87.5
    elif s < 0.8:
        pct = 32 + (s - 0.6) * 140
    elif s < 0.9:
        pct = 60 + (s - 0.8) * 200
    else:
        pct = 80 + (s - 0.9) * 200
    return max(0, min(100, round_half_up(pct)))


# ------------------------------------------------------------------
# Recommendations
# ------------------------------------------------------------------
def default_recommendations() -> Dict[str, Any]:
    out: Dict[str, Any] = {"is_non_tech_role": False}
    out.update({k: list(v) for k, v in DEFAULT_RECOMMENDATIONS.items()})
    return out


def _recommendation_prompt(resume_text: str, job_desc: str) -> str:
    limit = CV_CONFIG["RECOMMENDATION_TRUNCATE"]
    schema = {k: ["..."] for k in RECOMMENDATION_FIELDS}
    return f"""You are a senior technical recruiter who specialises in SOFTWARE ENGINEERING INTERNS.

First determine whether this is a software engineering internship (or another role requiring programming).
If it is NOT, respond exactly: NON_TECH_ROLE

Otherwise respond with JSON in exactly this shape:
{json.dumps(schema, indent=2)}

Be specific about missing technologies from the posting, quantified project impact, GitHub/portfolio links
and ATS-friendly structure.

Resume:
{truncate(resume_text, limit, "...")}

Job Description:
{truncate(job_desc, limit, "...")}"""


def merge_recommendations(data: Any) -> Dict[str, Any]:
    """Use each non-empty list from `data`, defaulting the rest."""
    out: Dict[str, Any] = {"is_non_tech_role": False}
    data = data if isinstance(data, dict) else {}
    for field in RECOMMENDATION_FIELDS:
        value = data.get(field)
        if isinstance(value, list) and value:
            out[field] = [str(v) for v in value]
        else:
            out[field] = list(DEFAULT_RECOMMENDATIONS[field])
    return out


def get_structured_recommendations(resume_text: str, job_desc: str) -> Dict[str, Any]:
    try:
        validate_inputs(resume_text, job_desc)
    except CVValidationError as e:
        log.error(f"Structured recommendations skipped: {e}")
        return default_recommendations()

    if not ai_utils.is_ready():
        if looks_non_tech(job_desc):
            return {"is_non_tech_role": True, "message": NON_TECH_MESSAGE}
        return default_recommendations()

    try:
        raw = ai_utils.chat(
            [{"role": "user", "content": _recommendation_prompt(resume_text, job_desc)}],
            temperature=CV_CONFIG["TEMPERATURE_RECOMMEND"],
            max_tokens=CV_CONFIG["MAX_TOKENS_RECOMMEND"],
        ).strip()
    except (OpenAIError, RuntimeError) as e:
        log.error(f"Structured recommendations error: {e}")
        return default_recommendations()

    if "NON_TECH_ROLE" in raw:
        return {"is_non_tech_role": True, "message": NON_TECH_MESSAGE}

    data = ai_utils.safe_extract_json(raw, default={})
    if not isinstance(data, dict) or not data:
        log.warning("Recommendation JSON unusable, using defaults")
        return default_recommendations()
    return merge_recommendations(data)


# ------------------------------------------------------------------
# Technologies
# ------------------------------------------------------------------
_CATEGORIES = {c.value for c in TechnologyCategory}


def extract_technologies(resume_text: str) -> List[Dict[str, Any]]:
    """[{name, category, confidence_level}] found on the resume; [] when unavailable."""
    if not ai_utils.is_ready() or not (resume_text or "").strip():
        return []

    prompt = f"""Extract every technical skill, programming language, framework, tool and technology in this resume.

Resume text:
{truncate(resume_text, CV_CONFIG["MAX_INPUT_CHARS"])}

Return ONLY a JSON array. Each item:
{{"name": "...", "category": one of {sorted(_CATEGORIES)}, "confidence_level": 1-10 (5 if unclear)}}"""
    try:
        raw = ai_utils.chat(
            [{"role": "user", "content": prompt}],
            temperature=0.1,
            max_tokens=CV_CONFIG["MAX_TOKENS_TECHNOLOGIES"],
        )
    except (OpenAIError, RuntimeError) as e:
        log.error(f"Technology extraction error: {e}")
        return []

    items = ai_utils.safe_extract_json(raw, default=[])
    if not isinstance(items, list):
        return []

    out: List[Dict[str, Any]] = []
    for it in items:
        if not isinstance(it, dict) or not it.get("name") or not it.get("category"):
            continue
        category = it["category"] if it["category"] in _CATEGORIES else TechnologyCategory.OTHER.value
        try:
            level = int(it.get("confidence_level", it.get("confidenceLevel", 5)))
        except (TypeError, ValueError):
            level = 5
        out.append({"name": str(it["name"]).strip(), "category": category, "confidence_level": max(1, min(10, level))})
    return out


# ------------------------------------------------------------------
# Orchestration
# ------------------------------------------------------------------
def _analysis_quality(result: Dict[str, Any]) -> Dict[str, Any]:
    strengths = result["strengths"]
    content_recs = result["content_recommendations"]
    structure_recs = result["structure_recommendations"]
    return {
        "strengths_count": len(strengths),
        "weaknesses_count": len(result["content_weaknesses"]) + len(result["structure_weaknesses"]),
        "recommendations_count": len(content_recs) + len(structure_recs),
        "is_comprehensive": len(strengths) >= 3 and len(content_recs) >= 5 and len(structure_recs) >= 5,
    }


def _empty_result(**extra: Any) -> Dict[str, Any]:
    base = {
        "match_percentage": 0,
        "is_non_tech_role": False,
        "strengths": [],
        "content_weaknesses": [],
        "structure_weaknesses": [],
        "content_recommendations": [],
        "structure_recommendations": [],
        "message": None,
        "has_error": False,
        "timestamp": _now_iso(),
        "analysis_quality": None,
    }
    base.update(extra)
    return base


def analyze_job_description(resume_text: str, raw_job_desc: str) -> Dict[str, Any]:
    """Result dict for one resume/JD pair."""
    try:
        validation = validate_job_description(raw_job_desc)
        if not validation["is_software"]:
            log.info("Non-software wording in job description")
    except CVValidationError as e:
        log.warning(f"Job description validation failed: {e}")
        return _empty_result(
            is_non_tech_role=True,
            has_error=True,
            message=f"Job description validation failed: {e}",
        )

    jd_text = strip_html_to_text(raw_job_desc)
    has_error = False
    try:
        similarity = get_similarity_score(resume_text, jd_text)
    except CVValidationError as e:
        log.error(f"Similarity calculation failed: {e}")
        similarity, has_error = 0.0, True

    structured = get_structured_recommendations(resume_text, jd_text)

    if structured.get("is_non_tech_role"):
        return _empty_result(is_non_tech_role=True, has_error=has_error, message=structured["message"])

    result = _empty_result(match_percentage=match_percentage(similarity), has_error=has_error)
    for field in RECOMMENDATION_FIELDS:
        result[field] = structured.get(field) or []
    result["analysis_quality"] = _analysis_quality(result)
    return result


def overall_feedback(non_tech_count: int, total: int) -> Dict[str, Any]:
    if total and non_tech_count == total:
        text = (
            "All provided job descriptions appear to be for non-software engineering roles. "
            "Please provide software engineering internship job descriptions for accurate analysis."
        )
    elif non_tech_count > 0:
        text = (
            f"{non_tech_count} out of {total} job descriptions were identified as non-software engineering roles. "
            "Focus on software engineering internship positions for best results."
        )
    else:
        text = "All job descriptions appear to be for software engineering roles. Analysis completed successfully."
    next_steps = NEXT_STEPS_SOFTWARE if non_tech_count < total else NEXT_STEPS_NON_TECH
    return {"overall_feedback": text, "next_steps": list(next_steps)}


def analyze_resume(resume_text: str, job_descriptions: List[str],
                   technologies: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    """
    Analyse one resume against several job descriptions.
    Returns {results, job_descriptions_html, extracted_technologies, metadata, recommendations}.
    """
    log.info(f"CV analysis started for {len(job_descriptions)} job description(s)")
    if technologies is None:
        technologies = extract_technologies(resume_text)

    results = [analyze_job_description(resume_text, jd) for jd in job_descriptions]
    total = len(results)
    non_tech = sum(1 for r in results if r["is_non_tech_role"])
    software = [r["match_percentage"] for r in results if not r["is_non_tech_role"]]

    metadata = {
        "total_processed": total,
        "non_tech_role_count": non_tech,
        "software_role_count": total - non_tech,
        "avg_match_score": sum(software) / max(1, len(software)),
        "technologies_extracted": len(technologies),
        "processing_date": _now_iso(),
    }
    log.info(f"CV analysis finished: {total} processed, {non_tech} non-tech")
    return {
        "results": results,
        "job_descriptions_html": [convert_markdown_to_html(jd) for jd in job_descriptions],
        "extracted_technologies": technologies,
        "metadata": metadata,
        "recommendations": overall_feedback(non_tech, total),
    }


def combined_profile_hash(cv_hash: str, job_descriptions: List[str]) -> str:
    return sha256_hex(cv_hash + "|||".join(job_descriptions))


# ------------------------------------------------------------------
# Stored results / statistics
# ------------------------------------------------------------------
COMMON_TECHNOLOGIES = ["JavaScript", "Python", "Java", "React", "Node.js", "Git", "SQL", "HTML", "CSS"]


def _str_list(value: Any) -> List[str]:
    return [str(v) for v in value] if isinstance(value, list) else []


def normalize_result(result: Dict[str, Any]) -> Dict[str, Any]:
    """Coerce a client-supplied result dict into the stored shape."""
    pct = result.get("match_percentage")
    return {
        "match_percentage": max(0, min(100, round_half_up(pct))) if isinstance(pct, (int, float)) and not isinstance(pct, bool) else 0,
        "is_non_tech_role": result.get("is_non_tech_role") is True,
        "strengths": _str_list(result.get("strengths")),
        "content_weaknesses": _str_list(result.get("content_weaknesses")),
        "structure_weaknesses": _str_list(result.get("structure_weaknesses")),
        "content_recommendations": _str_list(result.get("content_recommendations")),
        "structure_recommendations": _str_list(result.get("structure_recommendations")),
        "message": result.get("message") if isinstance(result.get("message"), str) else None,
        "has_error": result.get("has_error") is True,
        "timestamp": result.get("timestamp") or _now_iso(),
        "analysis_quality": result.get("analysis_quality") if isinstance(result.get("analysis_quality"), dict) else None,
    }


def result_stats(results: List[Dict[str, Any]], technologies: List[Dict[str, Any]]) -> Dict[str, Any]:
    software = [r for r in results if not r.get("is_non_tech_role")]
    scored = [r["match_percentage"] for r in software if r.get("match_percentage", 0) > 0]
    return {
        "total_analyses": len(results),
        "software_roles": len(software),
        "non_tech_roles": len(results) - len(software),
        "avg_match_score": (sum(scored) / len(scored)) if scored else 0,
        "technologies_extracted": len(technologies or []),
    }


def technology_stats(technology_lists: List[List[Dict[str, Any]]]) -> Dict[str, Any]:
    """Aggregate extracted technologies over several analyses."""
    lists = [t for t in technology_lists if t]
    if not lists:
        return {
            "total_analyses": 0,
            "unique_technologies": 0,
            "technologies": [],
            "categories": [],
            "top_technologies": [],
            "recommendations": [],
        }

    by_name: Dict[str, Dict[str, Any]] = {}
    for tech in (t for techs in lists for t in techs):
        level = tech.get("confidence_level") or 5
        entry = by_name.get(tech["name"])
        if entry is None:
            by_name[tech["name"]] = {
                "name": tech["name"],
                "category": tech.get("category"),
                "count": 1,
                "total_confidence": level,
                "avg_confidence": level,
            }
        else:
            entry["count"] += 1
            entry["total_confidence"] += level
            entry["avg_confidence"] = entry["total_confidence"] / entry["count"]

    technologies = sorted(by_name.values(), key=lambda t: t["count"], reverse=True)[:50]

    categories: Dict[str, Dict[str, Any]] = {}
    for tech in technologies:
        name = tech["category"] or "Other"
        bucket = categories.setdefault(name, {"name": name, "count": 0, "technologies": []})
        bucket["count"] += 1
        bucket["technologies"].append(tech)

    known = {t["name"].lower() for t in technologies}
    recommendations = [
        f"Consider learning {tech} - commonly required for software engineering roles"
        for tech in COMMON_TECHNOLOGIES
        if tech.lower() not in known
    ]
    most_frequent = max(categories.values(), key=lambda c: c["count"])["name"] if categories else "None"

    return {
        "total_analyses": len(lists),
        "unique_technologies": len(technologies),
        "technologies": technologies,
        "categories": list(categories.values()),
        "top_technologies": technologies[:10],
        "recommendations": recommendations[:5],
        "stats": {
            "avg_confidence_level": round_half_up(sum(t["avg_confidence"] for t in technologies) / max(len(technologies), 1)),
            "most_frequent_category": most_frequent,
        },
    }
