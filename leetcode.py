"""
=============================================================================
LEETCODE.PY — Cliente de LeetCode (GraphQL público)
=============================================================================
  - Reto diario (activeDailyCodingChallengeQuestion)
  - Detalle de un problema por slug
  - Limpieza del enunciado HTML → descripción, ejemplos, restricciones
  - Puntos por dificultad y código inicial por lenguaje
"""

import os
import re
import logging
from html import unescape
from typing import Optional

import httpx

logger = logging.getLogger("lockin.leetcode")

LEETCODE_GRAPHQL_URL = os.getenv("LEETCODE_GRAPHQL_URL", "https://leetcode.com/graphql")
LEETCODE_BASE_URL = "https://leetcode.com"

DAILY_QUERY = """
query questionOfToday {
  activeDailyCodingChallengeQuestion {
    date
    link
    question { title titleSlug difficulty }
  }
}
"""

PROBLEM_QUERY = """
query questionData($titleSlug: String!) {
  question(titleSlug: $titleSlug) {
    questionId
    title
    titleSlug
    difficulty
    content
    hints
    exampleTestcases
    topicTags { name slug }
    codeSnippets { lang langSlug code }
    sampleTestCase
  }
}
"""

# Puntos base por dificultad; una solución "partial" vale la mitad
DIFFICULTY_POINTS = {"easy": 10, "medium": 20, "hard": 30}

LANGUAGE_SLUGS = {
    "python": "python3",
    "javascript": "javascript",
    "typescript": "typescript",
    "java": "java",
    "cpp": "cpp",
    "csharp": "csharp",
    "go": "golang",
    "rust": "rust",
}


class LeetCodeError(Exception):
    """LeetCode no respondió o no devolvió el dato pedido"""


def _graphql(query: str, variables: Optional[dict] = None) -> dict:
    payload = {"query": query}
    if variables:
        payload["variables"] = variables
    try:
        with httpx.Client(timeout=10.0) as client:
            response = client.post(LEETCODE_GRAPHQL_URL, json=payload)
            response.raise_for_status()
    except httpx.HTTPError as e:
        logger.error(f"❌ Error consultando LeetCode: {e}")
        raise LeetCodeError(str(e)) from e
    return response.json().get("data") or {}


# =============================================================================
# ===================== CONSULTAS =============================================
# =============================================================================

def fetch_daily_problem() -> dict:
    """{date, title, slug, difficulty, link} del reto de hoy"""
    challenge = _graphql(DAILY_QUERY).get("activeDailyCodingChallengeQuestion")
    if not challenge:
        raise LeetCodeError("No daily challenge available")

    question = challenge["question"]
    return {
        "date": challenge["date"],
        "title": question["title"],
        "slug": question["titleSlug"],
        "difficulty": question["difficulty"],
        "link": f"{LEETCODE_BASE_URL}{challenge['link']}",
    }


def fetch_problem(title_slug: str) -> dict:
    """Detalle completo del problema, con 'constraints' ya extraídas del HTML"""
    question = _graphql(PROBLEM_QUERY, {"titleSlug": title_slug}).get("question")
    if not question:
        raise LeetCodeError(f"Problem not found: {title_slug}")

    question["hints"] = question.get("hints") or []
    question["topicTags"] = question.get("topicTags") or []
    question["codeSnippets"] = question.get("codeSnippets") or []
    question["exampleTestcases"] = question.get("exampleTestcases") or ""
    question["sampleTestCase"] = question.get("sampleTestCase") or ""
    question["constraints"] = _constraints_block(question.get("content") or "")
    return question


# =============================================================================
# ===================== ENUNCIADO =============================================
# =============================================================================

def _constraints_block(html: str) -> str:
    match = re.search(r"<strong>Constraints:</strong></p>\s*<ul>([\s\S]*?)</ul>", html, re.IGNORECASE)
    if not match:
        return ""
    text = match.group(1).replace("<li>", "• ").replace("</li>", "\n")
    return unescape(re.sub(r"<[^>]*>", "", text)).strip()


HTML_MARKUP = [
    ("<pre>", "\n```\n"), ("</pre>", "\n```\n"),
    ("</strong>", "**"),
    ("<em>", "_"), ("</em>", "_"),
    ("<code>", "`"), ("</code>", "`"),
    ("<p>", "\n"), ("</p>", "\n"),
    ("<li>", "• "), ("</li>", "\n"),
]


def parse_problem_content(html: str) -> dict:
    """
    HTML del enunciado → {description, examples, constraints}

    Los ejemplos son los bloques "**Example N:**"; la descripción es
    todo lo anterior al primero.
    """
    text = re.sub(r"<strong\b[^>]*>", "**", html or "")
    for tag, replacement in HTML_MARKUP:
        text = text.replace(tag, replacement)
    text = re.sub(r"<[^>]*>", "", text)
    text = unescape(text).replace("\xa0", " ")
    text = re.sub(r"\n{3,}", "\n\n", text).strip()

    examples = [
        m.group(0).strip()
        for m in re.finditer(r"\*\*Example \d+:\*\*[\s\S]*?(?=\*\*Example|\*\*Constraints|$)", text, re.IGNORECASE)
    ]

    constraints = []
    match = re.search(r"\*\*Constraints:\*\*([\s\S]*?)(?=\*\*|$)", text, re.IGNORECASE)
    if match:
        constraints = [c.strip() for c in match.group(1).split("•") if c.strip()]

    first_example = text.find("**Example")
    description = text[:first_example].strip() if first_example > 0 else text

    return {"description": description, "examples": examples, "constraints": constraints}


# =============================================================================
# ===================== PUNTOS Y CÓDIGO INICIAL ===============================
# =============================================================================

def difficulty_points(difficulty: str) -> int:
    return DIFFICULTY_POINTS.get((difficulty or "").lower(), DIFFICULTY_POINTS["easy"])


def points_for_correctness(difficulty: str, correctness: str) -> int:
    """correct → base | partial → base // 2 | incorrect → 0"""
    base = difficulty_points(difficulty)
    if correctness == "correct":
        return base
    if correctness == "partial":
        return base // 2
    return 0


def starter_code(problem: dict, language: str) -> str:
    language = (language or "").lower()
    slug = LANGUAGE_SLUGS.get(language, language)
    for snippet in problem.get("codeSnippets") or []:
        if snippet.get("langSlug") in (slug, language):
            return snippet.get("code") or ""
    return f"// Starter code not available for {language}"
