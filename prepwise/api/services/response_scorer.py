# prepwise/api/services/response_scorer.py
"""
Interview answer scoring.

`score_response` asks the LLM for structured feedback when it is configured and
otherwise (or on any failure) runs the local rule-based analysis below.
Feedback keys:
    strengths, improvements, score (0-100), detailed_analysis, keyword_matches,
    communication_clarity, technical_accuracy, structured_response (1-10)
"""
from __future__ import annotations

import json
import re
from typing import Any, Dict, List, Optional, Tuple

from openai import OpenAIError

from prepwise.api.config import SCORER_CONFIG
from prepwise.api.utils import ai_utils
from prepwise.api.utils.common_utils import dedupe, get_logger, round_half_up

log = get_logger(__name__)

# question types understood by the local analysis
BEHAVIORAL = "behavioral"
TECHNICAL_CODING = "technical_coding"
TECHNICAL_CONCEPTUAL = "technical_conceptual"

# ------------------------------------------------------------------
# Vocabulary
# ------------------------------------------------------------------
_KEYWORDS: Dict[str, Dict[str, List[str]]] = {
    BEHAVIORAL: {
        "positive": [
            "experience", "project", "team", "challenge", "learned", "improved", "result", "outcome",
            "responsibility", "collaboration", "problem", "solution", "leadership", "initiative",
        ],
        "structure": [
            "situation", "task", "action", "result", "when", "what", "how", "why", "because",
            "therefore", "consequently",
        ],
    },
    TECHNICAL_CODING: {
        "positive": [
            "algorithm", "complexity", "optimization", "data structure", "variable", "function", "loop",
            "condition", "array", "object", "method", "efficient", "solution", "approach",
        ],
        "advanced": [
            "time complexity", "space complexity", "big o", "hash map", "binary search",
            "dynamic programming", "recursion", "iteration",
        ],
    },
    TECHNICAL_CONCEPTUAL: {
        "positive": [
            "concept", "principle", "example", "difference", "advantage", "disadvantage", "use case",
            "implementation", "performance", "scalability",
        ],
        "technical": [
            "asynchronous", "synchronous", "callback", "promise", "api", "database", "framework",
            "library", "protocol", "architecture",
        ],
    },
}

_EXAMPLES_RE = re.compile(
    r"for example|for instance|such as|like when|consider|imagine|in my experience|i worked on|i built|i implemented",
    re.I,
)
_METRICS_RE = re.compile(
    r"\d+(\.\d+)?(%|percent|times|hours|days|weeks|months|years|users|requests|mb|gb|ms|seconds)", re.I
)
_CONNECTORS_RE = re.compile(
    r"\b(however|therefore|furthermore|moreover|additionally|consequently|because|since|although|while|whereas"
    r"|first|second|third|finally|in conclusion|as a result|on the other hand)\b",
    re.I,
)
_FILLERS_RE = re.compile(
    r"\b(um|uh|like|you know|actually|basically|sort of|kind of|i think|i guess|maybe|probably)\b", re.I
)
_CONFIDENCE_RE = re.compile(
    r"\b(definitely|certainly|clearly|obviously|absolutely|confident|sure|believe|know|understand)\b", re.I
)

_STAR_RES = {
    "situation": re.compile(r"\b(situation|context|background|setting|when|where|during|at the time|scenario)\b", re.I),
    "task": re.compile(r"\b(task|goal|objective|responsibility|needed to|had to|required|assigned|expected)\b", re.I),
    "action": re.compile(
        r"\b(action|did|implemented|decided|approach|solution|steps|method|executed|performed|created|built|developed)\b",
        re.I,
    ),
    "result": re.compile(
        r"\b(result|outcome|learned|achieved|impact|success|conclusion|end|effect|improvement|benefit)\b", re.I
    ),
}
_LEADERSHIP_RE = re.compile(
    r"\b(led|leadership|managed|coordinated|organized|initiated|took charge|responsible for|guided|mentored)\b", re.I
)
_PROBLEM_RE = re.compile(
    r"\b(problem|challenge|issue|difficulty|obstacle|solution|solved|resolved|overcame|addressed)\b", re.I
)

_ALGORITHM_RE = re.compile(
    r"\b(algorithm|approach|strategy|method|complexity|time|space|efficient|optimize|iterate|loop|recursion"
    r"|data structure|array|hash|map|tree|graph|sort|search)\b",
    re.I,
)
_COMPLEXITY_RE = re.compile(
    r"\b(O\(|big o|time complexity|space complexity|linear|quadratic|logarithmic|constant|efficient|performance)\b",
    re.I,
)
_TECH_TERMS_RE = re.compile(
    r"\b(asynchronous|synchronous|callback|promise|async|await|api|http|database|algorithm|data structure|class"
    r"|object|function|variable|loop|condition|boolean|string|array|hash|map|queue|stack|thread|process|memory"
    r"|cpu|performance|scalability|framework|library|protocol|architecture)\b",
    re.I,
)
_COMPARISON_RE = re.compile(
    r"\b(difference|compare|contrast|versus|vs|while|whereas|however|on the other hand|unlike|similar|different"
    r"|advantage|disadvantage|better|worse|prefer)\b",
    re.I,
)

# code checks are case-sensitive apart from error handling
_CODE_COMMENT_RE = re.compile(r'//|/\*|#|"""')
_CODE_IDENT_RE = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]{2,}")
_CODE_LOOP_RE = re.compile(r"\b(for|while|forEach|map|filter|reduce)\b")
_CODE_FUNC_RE = re.compile(r"\b(function|def|const\s+\w+\s*=|=>\s*\{|\w+\s*\(.*\)\s*\{)")
_CODE_ERROR_RE = re.compile(r"\b(try|catch|except|if.*error|throw|raise)\b", re.I)

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")


def empty_feedback() -> Dict[str, Any]:
    return {
        "strengths": [],
        "improvements": ["Please provide a complete response to the question"],
        "score": 0,
        "detailed_analysis": "No valid response provided. Please answer the question to receive feedback.",
        "keyword_matches": [],
        "communication_clarity": 1,
        "technical_accuracy": 1,
        "structured_response": 1,
    }


# ------------------------------------------------------------------
# Analysis passes
# ------------------------------------------------------------------
def analyze_content_depth(text: str, question_type: str) -> Dict[str, Any]:
    analysis: Dict[str, Any] = {"score": 0, "strengths": [], "improvements": [], "keywords": []}
    text_lower = text.lower()

    groups = _KEYWORDS.get(question_type) or _KEYWORDS[TECHNICAL_CONCEPTUAL]
    keyword_score = 0
    found: List[str] = []
    for words in groups.values():
        for keyword in words:
            if keyword in text_lower:
                keyword_score += 2
                found.append(keyword)

    analysis["score"] += min(keyword_score, 30)
    analysis["keywords"] = found

    if len(found) >= 5:
        analysis["strengths"].append("Used relevant technical vocabulary and concepts")
    elif len(found) >= 2:
        analysis["strengths"].append("Showed understanding of key concepts")
    else:
        analysis["improvements"].append("Include more specific technical terminology and concepts")

    examples = _EXAMPLES_RE.findall(text)
    if len(examples) >= 2:
        analysis["strengths"].append("Provided multiple concrete examples")
        analysis["score"] += 15
    elif len(examples) == 1:
        analysis["strengths"].append("Included specific examples")
        analysis["score"] += 10
    else:
        analysis["improvements"].append("Provide specific examples to illustrate your points")

    if _METRICS_RE.search(text):
        analysis["strengths"].append("Included quantifiable metrics and specific details")
        analysis["score"] += 10

    return analysis


def analyze_communication_quality(text: str, sentences: List[str]) -> Dict[str, Any]:
    analysis: Dict[str, Any] = {"clarity": 5, "structure": 5, "score": 0, "strengths": [], "improvements": []}

    if sentences:
        lengths = [len(s.split(" ")) for s in sentences]
        avg_length = sum(lengths) / len(lengths)
        variety = max(lengths) - min(lengths)

        if 12 <= avg_length <= 25 and variety >= 5:
            analysis["strengths"].append("Good sentence structure and variety")
            analysis["clarity"] += 2
            analysis["score"] += 10
        elif avg_length < 8:
            analysis["improvements"].append("Expand your sentences for more detailed explanations")
            analysis["clarity"] -= 1
        elif avg_length > 30:
            analysis["improvements"].append("Break down complex sentences for better clarity")
            analysis["clarity"] -= 1

    connectors = len(_CONNECTORS_RE.findall(text))
    if connectors >= 3:
        analysis["strengths"].append("Excellent logical flow and structure")
        analysis["structure"] += 2
        analysis["score"] += 15
    elif connectors >= 1:
        analysis["strengths"].append("Good use of connecting words")
        analysis["structure"] += 1
        analysis["score"] += 8
    else:
        analysis["improvements"].append("Use more connecting words to improve flow (however, therefore, because, etc.)")
        analysis["structure"] -= 1

    fillers = len(_FILLERS_RE.findall(text))
    if fillers <= 2:
        analysis["strengths"].append("Clear, confident communication")
        analysis["clarity"] += 1
        analysis["score"] += 8
    elif fillers > 5:
        analysis["improvements"].append("Reduce hesitation words (um, like, I think) for more confident delivery")
        analysis["clarity"] -= 2

    if len(_CONFIDENCE_RE.findall(text)) >= 2:
        analysis["strengths"].append("Spoke with confidence and certainty")
        analysis["score"] += 5

    return analysis


def _analyze_behavioral(text: str, analysis: Dict[str, Any]) -> Dict[str, Any]:
    star_count = sum(1 for rx in _STAR_RES.values() if rx.search(text))

    if star_count >= 4:
        analysis["strengths"].append("Excellent use of STAR method (Situation, Task, Action, Result)")
        analysis["technical"] += 3
        analysis["score"] += 25
    elif star_count >= 3:
        analysis["strengths"].append("Good structure using STAR method elements")
        analysis["technical"] += 2
        analysis["score"] += 15
    elif star_count >= 2:
        analysis["strengths"].append("Shows some structured thinking")
        analysis["technical"] += 1
        analysis["score"] += 8
    else:
        analysis["improvements"].append(
            "Use STAR method: describe the Situation, Task, Action taken, and Result achieved"
        )
        analysis["technical"] -= 1

    if len(_LEADERSHIP_RE.findall(text)) >= 2:
        analysis["strengths"].append("Demonstrated leadership and initiative")
        analysis["score"] += 10

    if len(_PROBLEM_RE.findall(text)) >= 3:
        analysis["strengths"].append("Strong focus on problem-solving")
        analysis["score"] += 8

    return analysis


def _analyze_coding(text: str, code: Optional[str], analysis: Dict[str, Any]) -> Dict[str, Any]:
    if code and code.strip():
        code_analysis = analyze_code_quality(code)
        analysis["technical"] += code_analysis["technical"]
        analysis["score"] += code_analysis["score"]
        analysis["strengths"].extend(code_analysis["strengths"])
        analysis["improvements"].extend(code_analysis["improvements"])
    else:
        analysis["improvements"].append("Provide code implementation along with explanation")
        analysis["technical"] -= 2
        analysis["score"] -= 15

    algorithm_terms = len(_ALGORITHM_RE.findall(text))
    if algorithm_terms >= 5:
        analysis["strengths"].append("Excellent technical explanation with algorithm concepts")
        analysis["technical"] += 2
        analysis["score"] += 15
    elif algorithm_terms >= 2:
        analysis["strengths"].append("Good use of technical terminology")
        analysis["technical"] += 1
        analysis["score"] += 8
    else:
        analysis["improvements"].append("Include more technical terms and algorithm concepts in your explanation")

    if _COMPLEXITY_RE.search(text):
        analysis["strengths"].append("Discussed algorithm complexity and performance")
        analysis["technical"] += 2
        analysis["score"] += 12
    else:
        analysis["improvements"].append("Discuss time and space complexity of your solution")

    return analysis


def _analyze_conceptual(text: str, analysis: Dict[str, Any]) -> Dict[str, Any]:
    terms = len(_TECH_TERMS_RE.findall(text))
    if terms >= 5:
        analysis["strengths"].append("Excellent technical vocabulary and depth")
        analysis["technical"] += 3
        analysis["score"] += 20
    elif terms >= 2:
        analysis["strengths"].append("Good technical understanding")
        analysis["technical"] += 1
        analysis["score"] += 10
    else:
        analysis["improvements"].append("Use more specific technical terminology")
        analysis["technical"] -= 1

    comparisons = len(_COMPARISON_RE.findall(text))
    if comparisons >= 3:
        analysis["strengths"].append("Excellent comparative analysis")
        analysis["score"] += 12
    elif comparisons >= 1:
        analysis["strengths"].append("Good comparative thinking")
        analysis["score"] += 6
    else:
        analysis["improvements"].append("Compare and contrast different approaches or concepts")

    return analysis


def analyze_question_specific(question_type: str, text: str, code: Optional[str]) -> Dict[str, Any]:
    analysis: Dict[str, Any] = {"technical": 5, "score": 0, "strengths": [], "improvements": []}
    if question_type == BEHAVIORAL:
        return _analyze_behavioral(text, analysis)
    if question_type == TECHNICAL_CODING:
        return _analyze_coding(text, code, analysis)
    if question_type == TECHNICAL_CONCEPTUAL:
        return _analyze_conceptual(text, analysis)
    return analysis


def analyze_code_quality(code: str) -> Dict[str, Any]:
    analysis: Dict[str, Any] = {"technical": 0, "score": 0, "strengths": [], "improvements": []}

    if _CODE_COMMENT_RE.search(code):
        analysis["strengths"].append("Good code documentation with comments")
        analysis["technical"] += 1
        analysis["score"] += 8
    else:
        analysis["improvements"].append("Add comments to explain your code logic")

    if _CODE_IDENT_RE.search(code):
        analysis["strengths"].append("Used descriptive variable names")
        analysis["technical"] += 1
        analysis["score"] += 5

    if _CODE_LOOP_RE.search(code):
        analysis["strengths"].append("Proper use of iteration/loops")
        analysis["technical"] += 1
        analysis["score"] += 8

    if _CODE_FUNC_RE.search(code):
        analysis["strengths"].append("Good code organization with functions")
        analysis["technical"] += 1
        analysis["score"] += 8

    if _CODE_ERROR_RE.search(code):
        analysis["strengths"].append("Included error handling")
        analysis["technical"] += 2
        analysis["score"] += 12
    else:
        analysis["improvements"].append("Consider adding error handling to make code more robust")

    lines = len([ln for ln in code.split("\n") if ln.strip()])
    if 5 <= lines <= 50:
        analysis["strengths"].append("Appropriate code length and complexity")
        analysis["score"] += 5
    elif lines < 5:
        analysis["improvements"].append("Provide a more complete implementation")
    else:
        analysis["improvements"].append("Consider simplifying or breaking down the solution")

    return analysis


def analyze_time_management(response_time: Optional[float], expected_time: Optional[float]) -> Dict[str, Any]:
    analysis: Dict[str, Any] = {"score": 0, "feedback": None}
    if not response_time or not expected_time:
        return analysis

    ratio = response_time / expected_time
    if 0.7 <= ratio <= 1.3:
        analysis.update(feedback="Excellent time management", score=10)
    elif 0.5 <= ratio <= 1.7:
        analysis.update(feedback="Good time management", score=5)
    elif ratio < 0.3:
        analysis.update(feedback="Take more time to provide thorough answers", score=-5)
    elif ratio > 2.0:
        analysis.update(feedback="Practice being more concise while maintaining detail", score=-3)
    return analysis


def build_detailed_analysis(feedback: Dict[str, Any]) -> str:
    strengths = ", ".join(feedback["strengths"][:3]).lower()
    improvements = " and ".join(feedback["improvements"][:2]).lower()

    out = f"Your response demonstrates {strengths or 'basic understanding of the topic'}. "

    score = feedback["score"]
    if score >= 80:
        out += "This was an excellent response with strong technical depth and clear communication. "
    elif score >= 65:
        out += "This was a solid response with good technical understanding. "
    elif score >= 50:
        out += "This response shows potential but has room for improvement. "
    else:
        out += "This response needs significant improvement in several areas. "

    if improvements:
        out += f"To enhance your future responses, focus on {improvements}. "

    if feedback["communication_clarity"] >= 7:
        out += "Your communication was clear and well-structured."
    else:
        out += "Work on organizing your thoughts more clearly and using connecting words to improve flow."
    return out


def _clamp(value: Any, lo: int, hi: int) -> int:
    return int(max(lo, min(hi, round_half_up(float(value)))))


def ensure_feedback_quality(feedback: Dict[str, Any]) -> Dict[str, Any]:
    if not feedback.get("strengths"):
        feedback["strengths"] = ["Attempted to answer the question completely"]
    if not feedback.get("improvements"):
        feedback["improvements"] = ["Continue practicing to build confidence and technical depth"]

    feedback["strengths"] = dedupe(feedback["strengths"])
    feedback["improvements"] = dedupe(feedback["improvements"])

    feedback["score"] = _clamp(feedback["score"], 0, 100)
    for key in ("communication_clarity", "technical_accuracy", "structured_response"):
        feedback[key] = _clamp(feedback[key], 1, 10)
    return feedback


def analyze_locally(
    question_type: str,
    text: str,
    code: Optional[str] = None,
    response_time: Optional[float] = None,
    expected_duration: Optional[float] = None,
) -> Dict[str, Any]:
    """Rule-based feedback for a non-empty answer."""
    feedback: Dict[str, Any] = {
        "strengths": [],
        "improvements": [],
        "score": 50,
        "detailed_analysis": "",
        "keyword_matches": [],
        "communication_clarity": 5,
        "technical_accuracy": 5,
        "structured_response": 5,
    }
    sentences = [s for s in _SENTENCE_SPLIT_RE.split(text) if s.strip()]

    content = analyze_content_depth(text, question_type)
    feedback["score"] += content["score"]
    feedback["strengths"].extend(content["strengths"])
    feedback["improvements"].extend(content["improvements"])
    feedback["keyword_matches"] = content["keywords"]

    comm = analyze_communication_quality(text, sentences)
    feedback["communication_clarity"] = comm["clarity"]
    feedback["structured_response"] = comm["structure"]
    feedback["score"] += comm["score"]
    feedback["strengths"].extend(comm["strengths"])
    feedback["improvements"].extend(comm["improvements"])

    specific = analyze_question_specific(question_type, text, code)
    feedback["technical_accuracy"] = specific["technical"]
    feedback["score"] += specific["score"]
    feedback["strengths"].extend(specific["strengths"])
    feedback["improvements"].extend(specific["improvements"])

    timing = analyze_time_management(response_time, expected_duration)
    feedback["score"] += timing["score"]
    if timing["feedback"]:
        if timing["score"] > 0:
            feedback["strengths"].append(timing["feedback"])
        else:
            feedback["improvements"].append(timing["feedback"])

    feedback["detailed_analysis"] = build_detailed_analysis(feedback)
    return ensure_feedback_quality(feedback)


# ------------------------------------------------------------------
# Remote (LLM) analysis
# ------------------------------------------------------------------
_SYSTEM_PROMPT = "You are an expert interview assessor. Respond only with valid JSON."


def _build_prompt(question: str, question_type: str, text: str, code: Optional[str],
                  response_time: Optional[float], expected_duration: Optional[float]) -> str:
    return f"""Analyze this interview response for a software engineering intern candidate.

Question: {question}
Question Type: {question_type}
Response: {text}
Code: {code or "N/A"}
Response Time: {response_time or "unknown"} seconds (expected {expected_duration or "unknown"})

Return JSON with exactly these keys:
{{
  "strengths": ["..."],
  "improvements": ["..."],
  "score": 0-100,
  "detailed_analysis": "...",
  "keyword_matches": ["..."],
  "communication_clarity": 1-10,
  "technical_accuracy": 1-10,
  "structured_response": 1-10
}}

Evaluate content relevance, technical accuracy, communication clarity, structure and timing.
Be constructive but honest. Focus on intern-level expectations."""


def _is_number(x: Any) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def _valid_remote_feedback(data: Any) -> bool:
    return (
        isinstance(data, dict)
        and _is_number(data.get("score"))
        and isinstance(data.get("strengths"), list)
        and isinstance(data.get("improvements"), list)
    )


def analyze_remotely(question: str, question_type: str, text: str, code: Optional[str] = None,
                     response_time: Optional[float] = None,
                     expected_duration: Optional[float] = None) -> Optional[Dict[str, Any]]:
    """LLM feedback, or None when the reply is unusable."""
    raw = ai_utils.chat(
        [
            {"role": "system", "content": _SYSTEM_PROMPT},
            {"role": "user", "content": _build_prompt(question, question_type, text, code,
                                                      response_time, expected_duration)},
        ],
        temperature=SCORER_CONFIG["TEMPERATURE"],
        max_tokens=SCORER_CONFIG["MAX_TOKENS"],
    )
    data = ai_utils.safe_extract_json(raw, default={})
    if not _valid_remote_feedback(data):
        log.warning(f"[scorer] remote feedback rejected: {str(raw)[:200]!r}")
        return None

    feedback = {
        "strengths": [str(s) for s in data["strengths"]],
        "improvements": [str(s) for s in data["improvements"]],
        "score": data["score"],
        "detailed_analysis": str(data.get("detailed_analysis") or ""),
        "keyword_matches": [str(k) for k in data.get("keyword_matches") or []],
    }
    for key in ("communication_clarity", "technical_accuracy", "structured_response"):
        feedback[key] = data.get(key) if _is_number(data.get(key)) else 5
    return ensure_feedback_quality(feedback)


def score_response(
    question_type: str,
    text: Optional[str],
    code: Optional[str] = None,
    response_time: Optional[float] = None,
    expected_duration: Optional[float] = None,
    question: str = "",
    use_remote: bool = True,
) -> Tuple[Dict[str, Any], str]:
    """Returns (feedback, source) where source is "ai" or "local"."""
    if not text or not text.strip():
        return empty_feedback(), "local"

    if use_remote and SCORER_CONFIG["REMOTE_ENABLED"] and ai_utils.is_ready():
        try:
            remote = analyze_remotely(question, question_type, text, code, response_time, expected_duration)
            if remote is not None:
                return remote, "ai"
        except (OpenAIError, RuntimeError, ValueError, json.JSONDecodeError) as e:
            log.warning(f"[scorer] remote analysis failed, using local analysis: {e}")

    return analyze_locally(question_type, text, code, response_time, expected_duration), "local"
