"""
=============================================================================
AI.PY — Generadores de Contenido con IA (Claude)
=============================================================================
Todo lo que LockIn le pide al modelo pasa por aquí:
  - Analizar el objetivo y generar preguntas de seguimiento
  - Una pregunta extra cuando el usuario responde "Other"
  - El plan anual "de consultor" (trimestres, meses, métricas)
  - El esquema del plan mejorado (temas mensuales + tareas de ejemplo)
  - Quizzes de 5 preguntas para verificar una tarea
  - Revisión de soluciones de LeetCode

Un único intento por petición (sin reintentos). Si la respuesta no es
JSON válido se lanza AIParseError y la API responde 500 con un mensaje
genérico; el detalle solo va al log.
"""

import os
import re
import json
import logging
from typing import Optional

import anthropic
from pydantic import ValidationError

from schemas import (
    AnalyzeGoalRequest, FollowUpRequest, GoalInput, PlanOutline, QuizRequest,
    VerifyLeetCodeRequest, YearPlanRequest
)

logger = logging.getLogger("lockin.ai")

# ─────────────────────────────────────────────────────────────────────────────
# CONFIGURACIÓN
# ─────────────────────────────────────────────────────────────────────────────

ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY", "")
AI_MODEL = os.getenv("LOCKIN_AI_MODEL", "claude-3-haiku-20240307")
AI_MAX_TOKENS = int(os.getenv("LOCKIN_AI_MAX_TOKENS", "8192"))
AI_TEMPERATURE = float(os.getenv("LOCKIN_AI_TEMPERATURE", "0.7"))

QUIZ_QUESTIONS = 5
QUIZ_PASS_SCORE = 3
CUSTOM_CURRICULUM_MIN_LENGTH = 50

_client = None


class AIServiceError(Exception):
    """El modelo no está configurado o la llamada falló"""


class AIParseError(AIServiceError):
    """El modelo respondió, pero no con el JSON esperado"""


def ai_enabled() -> bool:
    return bool(ANTHROPIC_API_KEY)


def get_client() -> anthropic.Anthropic:
    """Cliente único, creado la primera vez que se necesita"""
    global _client
    if not ANTHROPIC_API_KEY:
        raise AIServiceError("ANTHROPIC_API_KEY not set")
    if _client is None:
        _client = anthropic.Anthropic(api_key=ANTHROPIC_API_KEY)
    return _client


def generate_text(prompt: str, max_tokens: Optional[int] = None) -> str:
    """Una llamada al modelo; devuelve el texto de la respuesta"""
    try:
        message = get_client().messages.create(
            model=AI_MODEL,
            max_tokens=max_tokens or AI_MAX_TOKENS,
            temperature=AI_TEMPERATURE,
            messages=[{"role": "user", "content": prompt}],
        )
    except anthropic.APIError as e:
        logger.error(f"❌ Error llamando al modelo: {e}")
        raise AIServiceError(str(e)) from e

    if not message.content:
        raise AIParseError("Empty response from model")
    return message.content[0].text.strip()


# =============================================================================
# ===================== PARSEO DE RESPUESTAS ==================================
# =============================================================================

def strip_code_fences(text: str) -> str:
    """Quita ```json ... ``` si el modelo envolvió la respuesta"""
    text = text.strip()
    if text.startswith("```json"):
        text = text[7:]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def parse_json_response(text: str) -> dict:
    """Siempre un objeto JSON: una lista o un número también es un fallo del modelo"""
    try:
        data = json.loads(strip_code_fences(text))
    except json.JSONDecodeError as e:
        logger.error(f"❌ JSON inválido del modelo: {e} | inicio: {text[:200]!r}")
        raise AIParseError(f"Failed to parse model response as JSON: {e}") from e
    if not isinstance(data, dict):
        logger.error(f"❌ El modelo devolvió {type(data).__name__} en vez de un objeto JSON")
        raise AIParseError("Model response is not a JSON object")
    return data


def _open_brackets(text: str) -> list[str]:
    """Pila de '{' y '[' sin cerrar, ignorando lo que va dentro de strings"""
    stack = []
    in_string = False
    escaped = False
    for char in text:
        if escaped:
            escaped = False
            continue
        if char == "\\":
            escaped = True
            continue
        if char == '"':
            in_string = not in_string
            continue
        if in_string:
            continue
        if char in "{[":
            stack.append(char)
        elif char in "}]" and stack:
            stack.pop()
    return stack


def _unescaped_quotes(text: str) -> int:
    return len(re.findall(r'(?<!\\)"', text))


def repair_truncated_json(text: str) -> str:
    """
    Intenta cerrar un JSON que el modelo dejó a medias (max_tokens):
      1. Si quedó un string abierto, corta en la última propiedad completa
         (o cierra la comilla)
      2. Quita claves sin valor y comas colgando
      3. Cierra los corchetes y llaves pendientes en orden
    """
    safe = re.sub(r"\\+$", "", text)

    if _unescaped_quotes(safe) % 2:
        tail = safe[safe.rfind('"') + 1:]
        cut = max(safe.rfind('",') + 2, safe.rfind('"}') + 2, safe.rfind('"]') + 2)
        if ":" in tail and cut > 10:
            safe = safe[:cut]
        else:
            safe += '"'

    safe = re.sub(r',\s*"[^"]*"\s*$', "", safe)
    safe = re.sub(r'{\s*"[^"]*"\s*$', "{", safe)
    safe = re.sub(r":\s*$", ': ""', safe)
    safe = re.sub(r":\s*\[\s*$", ": []", safe)
    safe = re.sub(r":\s*{\s*$", ": {}", safe)
    safe = re.sub(r",\s*$", "", safe)

    closers = {"{": "}", "[": "]"}
    safe += "".join(closers[c] for c in reversed(_open_brackets(safe)))

    return re.sub(r",(\s*[\]}])", r"\1", safe)


def _topics(theme: dict) -> list:
    topics = theme.get("topics")
    return topics if isinstance(topics, list) else []


def _partial_outline(text: str, category_name: str) -> Optional[dict]:
    """
    Último recurso: rescata monthlyThemes (y taskPatterns si se puede)
    de una respuesta rota. Sin patrones, se inventan a partir de los temas.
    """
    themes_match = re.search(r'"monthlyThemes"\s*:\s*\[([\s\S]*?)\](?=\s*,\s*"taskPatterns")', text)
    if not themes_match:
        return None
    try:
        themes = json.loads(repair_truncated_json("[" + themes_match.group(1) + "]"))
    except json.JSONDecodeError:
        return None
    if not isinstance(themes, list) or not themes or not all(isinstance(t, dict) for t in themes):
        return None

    patterns = []
    patterns_match = re.search(r'"taskPatterns"\s*:\s*\[([\s\S]*)', text)
    if patterns_match:
        try:
            patterns = json.loads(repair_truncated_json("[" + patterns_match.group(1)))
        except json.JSONDecodeError:
            patterns = []
        if not isinstance(patterns, list):
            patterns = []

    if not patterns:
        cycle = ["learn", "practice", "build"]
        patterns = [
            {
                "month": theme.get("month"),
                "tasks": [
                    {
                        "title": f"Learn {topic}",
                        "description": f"Study and practice {topic} as part of {theme.get('theme', '')}",
                        "type": cycle[i % 3],
                        "topic": topic,
                    }
                    for i, topic in enumerate(_topics(theme)[:5])
                ],
            }
            for theme in themes
        ]

    return {
        "title": f"Master {category_name or 'Your Goal'}",
        "description": f"A structured learning path starting with {themes[0].get('theme') or 'Learning Journey'}",
        "monthlyThemes": themes,
        "taskPatterns": patterns,
    }


def check_plan_outline(outline) -> dict:
    """
    JSON válido no basta: la forma también tiene que ser la de un esquema.
    Devuelve el esquema normalizado o lanza AIParseError.
    """
    try:
        return PlanOutline.model_validate(outline).to_document()
    except ValidationError as e:
        logger.error(f"❌ Esquema del plan con forma inesperada: {e.error_count()} errores")
        raise AIParseError("AI returned a plan in an unexpected format. Please try again.") from e


def parse_plan_outline(text: str, category_name: str = "") -> dict:
    """
    Parsea el esquema del plan: directo → reparado → parcial,
    y después comprueba su forma.
    Lanza AIParseError si ninguno funciona.
    """
    return check_plan_outline(_load_plan_outline(strip_code_fences(text), category_name))


def _load_plan_outline(text: str, category_name: str) -> dict:
    try:
        outline = json.loads(text)
        if isinstance(outline, dict) and outline.get("monthlyThemes") and outline.get("taskPatterns"):
            return outline
        logger.warning("⚠️ Esquema del plan sin monthlyThemes/taskPatterns")
    except json.JSONDecodeError:
        logger.info("🔧 Primer parseo fallido, intentando reparar JSON truncado...")

    try:
        outline = json.loads(repair_truncated_json(text))
        if isinstance(outline, dict) and outline.get("monthlyThemes") and "taskPatterns" in outline:
            logger.info("🔧 JSON reparado")
            return outline
    except json.JSONDecodeError:
        logger.warning("⚠️ La reparación también falló")

    outline = _partial_outline(text, category_name)
    if outline:
        logger.info(f"🩹 Plan recuperado de datos parciales ({len(outline['monthlyThemes'])} temas)")
        return outline

    logger.error(f"❌ Respuesta del plan irrecuperable: {text[:500]!r}")
    raise AIParseError("AI failed to generate a valid plan. Please try again.")


# =============================================================================
# ===================== OBJETIVO Y PREGUNTAS ==================================
# =============================================================================

def analyze_goal(req: AnalyzeGoalRequest) -> dict:
    """
    Detecta la categoría del objetivo y genera 4-6 preguntas de
    seguimiento encadenadas (con opción "Other" al final).
    """
    category_context = ""
    if req.category_name:
        category_context = (
            f'\n\nIMPORTANT: The user has already selected their learning category as '
            f'"{req.category_name}" (ID: {req.selected_category}). You MUST respect this category '
            "selection. Generate questions appropriate for this category, NOT a different one."
        )

    prompt = f"""You are an expert technical curriculum architect and career coach.
Analyze the user's learning goal and generate contextual follow-up questions that will help
create a structured, practical learning plan.

User's Goal: "{req.goal}"{category_context}

Generate 4-6 questions in a logical sequence:
primary choice -> specialization -> supporting tools -> focus area -> end goal.
Include at least one conditional question that depends on a previous answer.
Mix "single" and "multi" question types. Every option needs a short description.
ALWAYS include {{"value": "other", "label": "Other (I'll specify)"}} as the last option.
Do NOT ask about experience level. If you don't ask about daily time, suggest one.

Return ONLY valid JSON (no markdown, no code blocks):
{{
  "detectedCategory": "backend|frontend|fullstack|ml-ai|data-engineer|devops|mobile|cloud|dsa|academic|language|fitness|music|business|creative|personal|custom",
  "categoryName": "Human-readable category name",
  "categoryIcon": "Single emoji",
  "summary": "One sentence summarizing their goal",
  "questions": [
    {{
      "id": "primary-choice",
      "question": "Question text",
      "type": "single",
      "reason": "Why this matters",
      "options": [{{"value": "v1", "label": "Label", "description": "When to choose this"}}],
      "conditionalQuestions": []
    }}
  ],
  "suggestedTimeCommitment": "1hr-daily|2hr-daily|3hr-daily"
}}"""

    result = parse_json_response(generate_text(prompt))
    logger.info(f"🎯 Objetivo analizado → {result.get('detectedCategory')} ({len(result.get('questions') or [])} preguntas)")
    return result


def generate_followup(req: FollowUpRequest) -> dict:
    """UNA pregunta extra para aclarar una respuesta escrita a mano"""
    category_line = f"Category: {req.category_name}\n" if req.category_name else ""
    prompt = f"""You are an expert curriculum architect helping a user create a personalized learning plan.

The user is working on: "{req.goal}"
{category_line}They were asked: "{req.parent_question}"
They selected "Other" and typed: "{req.custom_answer}"
Previous answers context: {json.dumps(req.previous_answers)}

Generate ONE follow-up question that clarifies their custom input and is relevant to their goal.

Return ONLY valid JSON (no markdown, no code blocks):
{{
  "question": "Your follow-up question here",
  "type": "single",
  "reason": "Brief explanation of why this matters",
  "options": [
    {{"value": "option1", "label": "Option 1", "description": "When to choose this"}},
    {{"value": "other", "label": "Other (I'll specify)", "description": "If none of the above fit"}}
  ]
}}

Generate 4-6 options based on "{req.custom_answer}". Always include "Other" as the last option."""

    return parse_json_response(generate_text(prompt))


# =============================================================================
# ===================== PLANES ================================================
# =============================================================================

def generate_year_plan(req: YearPlanRequest) -> dict:
    """Plan de 12 meses: meta, trimestres, detalle mensual, métricas..."""
    prompt = f"""You are an AI planning architect specializing in sustainable long-term goal achievement.
Generate a detailed 12-month execution plan for this user. Be specific, practical and honest
about difficulty. No toxic positivity.

- Goal: {req.goal}
- Experience Level: {req.experience}
- Stack/Domain: {req.stack}
- Time Available: {req.time_available}
- Constraints: {req.constraints or "None specified"}

Return ONLY valid JSON (no markdown, no code blocks) with these keys:
"meta" (goal_statement, realistic_timeline, critical_success_factors, common_failure_points),
"quarterly_map" (Q1..Q4 with name, primary_objective, success_criteria, expected_skill_level, stretch_goal),
"monthly_detail" (12 entries with month, learning_focus, practice_mode, review_checkpoint, recovery_buffer),
"weekly_template" (structure, multi_track_notes),
"daily_task_examples" (at least 4, each with day, core_task, extended_work, quick_win),
"sustainability" (recovery_weeks, flex_days_policy, adjustment_checkpoints),
"metrics" (daily, weekly, monthly, quarterly with target and tracking),
"recovery_protocol" (days_1_to_3, week_1, weeks_2_plus, mindset).

Generate ALL 12 months in monthly_detail."""

    plan = parse_json_response(generate_text(prompt))
    logger.info(f"📅 Plan anual generado ({len(plan.get('monthly_detail') or [])} meses)")
    return plan


LEVEL_GUIDANCE = {
    "beginner": "- Start from absolute basics, assume no prior knowledge\n"
                "- Extra scaffolding and step-by-step guidance\n"
                "- More time on fundamentals",
    "intermediate": "- Quick review of basics, then accelerate\n"
                    "- More challenging projects earlier\n"
                    "- Include some advanced topics in later months",
}
ADVANCED_GUIDANCE = ("- Fast-track through fundamentals\n"
                     "- Focus on advanced patterns and optimization\n"
                     "- Include system design and architecture")

SCHEDULE_LABELS = {"weekdays": "weekdays only", "fullweek": "every day"}


def plan_months(total_days: int) -> int:
    """Entre 1 y 12 meses, ~30 días por mes"""
    return min(max(-(-total_days // 30), 1), 12)


def _custom_curriculum_prompt(goal: GoalInput, daily_minutes: int, total_days: int) -> str:
    return f"""You are an expert technical curriculum architect. Transform the user's custom
curriculum into a structured learning plan.

=== USER'S CUSTOM CURRICULUM ===
{goal.custom_curriculum}

Experience Level: {goal.experience_level}
Daily Time Available: {daily_minutes} minutes
Total Learning Days: {total_days} ({SCHEDULE_LABELS[goal.schedule_type.value]})

Respect the ORDER of the curriculum (first items are foundational), don't skip topics,
and group related items into monthly themes with 5 topics each.
Task types: learn, practice, build, review.

Return ONLY valid JSON:
{{
  "title": "Title based on curriculum (max 8 words)",
  "description": "One sentence",
  "monthlyThemes": [{{"month": 1, "theme": "Theme", "focus": "Focus", "topics": ["T1", "T2", "T3", "T4", "T5"], "project": "Project"}}],
  "taskPatterns": [{{"month": 1, "tasks": [{{"title": "Task", "description": "Instructions", "type": "learn", "topic": "T1"}}]}}]
}}
{LEVEL_GUIDANCE.get(goal.experience_level, ADVANCED_GUIDANCE)}"""


def _standard_goal_prompt(goal: GoalInput, daily_minutes: int, total_days: int) -> str:
    months = plan_months(total_days)
    goal_text = goal.primary_goal or goal.custom_goal or ""
    preferences = ", ".join(
        f"{k}: {', '.join(v) if isinstance(v, list) else v}" for k, v in goal.selected_options.items()
    )
    preferences_line = f"PREFERENCES: {preferences}\n" if preferences else ""

    return f"""You are an expert curriculum designer. Create a {months}-month learning plan.

GOAL: "{goal_text}"
CATEGORY: {goal.category_name or goal.category}
LEVEL: {goal.experience_level}
DAILY TIME: {daily_minutes} minutes
DURATION: {total_days} days ({SCHEDULE_LABELS[goal.schedule_type.value]})
{preferences_line}
Create a curriculum with monthly themes and 5-6 SAMPLE tasks per month (they will be expanded to fill all days).
Keep descriptions SHORT (under 15 words). Task titles must be specific and actionable.
Use real tools/frameworks for "{goal_text}".

Return ONLY valid JSON:
{{
  "title": "Short title (5 words max)",
  "description": "One short sentence",
  "monthlyThemes": [{{"month": 1, "theme": "Theme", "focus": "Focus", "topics": ["T1", "T2", "T3", "T4", "T5"], "project": "Project"}}],
  "taskPatterns": [{{"month": 1, "tasks": [{{"title": "Task title", "description": "Short desc", "type": "learn", "topic": "T1"}}]}}]
}}

CRITICAL:
1. Generate ALL {months} months completely
2. Each month: 5 topics + 5-6 tasks only
3. Task types: learn, practice, build, review
4. Keep ALL text concise to avoid truncation
{LEVEL_GUIDANCE.get(goal.experience_level, ADVANCED_GUIDANCE)}"""


def generate_plan_outline(goal: GoalInput, daily_minutes: int, total_days: int) -> dict:
    """
    Pide al modelo los temas mensuales y las tareas de ejemplo.
    Con un currículum propio de más de 50 caracteres se usa ese como base.
    """
    has_custom = bool(goal.custom_curriculum) and len(goal.custom_curriculum) > CUSTOM_CURRICULUM_MIN_LENGTH
    if has_custom:
        prompt = _custom_curriculum_prompt(goal, daily_minutes, total_days)
    else:
        prompt = _standard_goal_prompt(goal, daily_minutes, total_days)

    outline = parse_plan_outline(generate_text(prompt), goal.category_name or goal.category or "Programming")
    logger.info(
        f"🤖 Esquema {'personalizado' if has_custom else 'estándar'}: "
        f"{len(outline['monthlyThemes'])} temas, {len(outline['taskPatterns'])} meses de tareas"
    )
    return outline


# =============================================================================
# ===================== QUIZ ==================================================
# =============================================================================

def generate_quiz(req: QuizRequest) -> dict:
    """5 preguntas tipo test (4 opciones). Se aprueba con 3"""
    if req.quiz_topics:
        topics_line = f"Quiz Topics: {', '.join(req.quiz_topics)}"
    else:
        topics_line = f"Tags: {', '.join(req.tags) or 'general'}"

    prompt = f"""Generate a {QUIZ_QUESTIONS}-question multiple choice quiz to verify understanding of the following learning task.

Task: {req.task_title}
Description: {req.task_description or "Complete the learning task"}
{topics_line}

REQUIREMENTS:
1. Create exactly {QUIZ_QUESTIONS} questions
2. Each question should have exactly 4 options
3. Test practical understanding, not memorization
4. Mix difficulty: 2 easy, 2 medium, 1 challenging
5. Include brief explanations for correct answers

Return ONLY valid JSON (no markdown, no code blocks):
{{
  "questions": [
    {{"question": "The question text", "options": ["A", "B", "C", "D"], "correctIndex": 0, "explanation": "Why this is correct"}}
  ]
}}"""

    raw = parse_json_response(generate_text(prompt))
    try:
        questions = [
            {
                "id": f"{req.task_id}-q{i}",
                "question": q["question"],
                "options": q["options"],
                "correctIndex": q["correctIndex"],
                "explanation": q.get("explanation", ""),
            }
            for i, q in enumerate(raw["questions"], start=1)
        ]
    except (KeyError, TypeError, AttributeError) as e:
        raise AIParseError(f"Quiz response missing fields: {e}") from e

    return {
        "taskId": req.task_id,
        "questions": questions,
        "passScore": QUIZ_PASS_SCORE,
        "totalQuestions": QUIZ_QUESTIONS,
    }


# =============================================================================
# ===================== LEETCODE ==============================================
# =============================================================================

def verify_leetcode_solution(req: VerifyLeetCodeRequest, problem: dict, parsed: dict) -> dict:
    """
    Revisa la solución del usuario contra el enunciado.

    problem → detalle de LeetCode (title, difficulty, hints, topicTags)
    parsed  → parse_problem_content() del HTML (description, examples, constraints)

    Devuelve el análisis crudo del modelo: correctness, issues,
    actual*/is*Correct, complexityExplanation, codeScore, feedback, improvements.
    """
    examples = "\n\n".join(parsed.get("examples") or [])
    constraints = "\n".join(parsed.get("constraints") or [])
    tags = ", ".join(t.get("name", "") for t in problem.get("topicTags") or [])

    prompt = f"""You are an expert competitive programmer and code reviewer.
Review this solution to the LeetCode problem "{problem.get('title')}" ({problem.get('difficulty')}).

=== PROBLEM ===
{parsed.get('description', '')}

=== EXAMPLES ===
{examples or "None"}

=== CONSTRAINTS ===
{constraints or "None"}

Topics: {tags or "None"}

=== USER'S SOLUTION ({req.language}) ===
{req.code}

The user claims: time {req.user_time_complexity or "not given"}, space {req.user_space_complexity or "not given"}.

Trace the examples through the code and check edge cases from the constraints.
"correct" only if it solves all cases; "partial" if the approach is right but has bugs;
"incorrect" otherwise.

Return ONLY valid JSON (no markdown, no code blocks):
{{
  "correctness": "correct|partial|incorrect",
  "issues": ["Specific bug or missed case"],
  "actualTimeComplexity": "O(...)",
  "actualSpaceComplexity": "O(...)",
  "isTimeCorrect": true,
  "isSpaceCorrect": true,
  "complexityExplanation": "Why",
  "codeScore": 85,
  "feedback": "Overall feedback",
  "improvements": ["Suggestion"]
}}"""

    analysis = parse_json_response(generate_text(prompt, max_tokens=2048))
    if analysis.get("correctness") not in ("correct", "partial", "incorrect"):
        raise AIParseError(f"Unknown correctness value: {analysis.get('correctness')!r}")
    return analysis
