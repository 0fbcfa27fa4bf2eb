"""
=============================================================================
RESOURCES.PY — Recursos de Aprendizaje por Tarea
=============================================================================
Genera enlaces que SIEMPRE funcionan:
  - Documentación oficial de las tecnologías detectadas en la tarea
  - Búsquedas en YouTube, GitHub, Dev.to, Stack Overflow y Coursera

No se inventan URLs concretas de tutoriales: solo páginas oficiales
conocidas y URLs de búsqueda.
"""

import re
from urllib.parse import quote

from schemas import TaskResource

# ─────────────────────────────────────────────────────────────────────────────
# DOCUMENTACIÓN OFICIAL
# ─────────────────────────────────────────────────────────────────────────────

DOC_SITES = {
    "python": ("https://docs.python.org/3/", "Python Docs"),
    "javascript": ("https://developer.mozilla.org/en-US/docs/Web/JavaScript", "MDN JavaScript"),
    "typescript": ("https://www.typescriptlang.org/docs/", "TypeScript Docs"),
    "react": ("https://react.dev/", "React Docs"),
    "nextjs": ("https://nextjs.org/docs", "Next.js Docs"),
    "nodejs": ("https://nodejs.org/docs/latest/api/", "Node.js Docs"),
    "django": ("https://docs.djangoproject.com/", "Django Docs"),
    "fastapi": ("https://fastapi.tiangolo.com/", "FastAPI Docs"),
    "flask": ("https://flask.palletsprojects.com/", "Flask Docs"),
    "postgresql": ("https://www.postgresql.org/docs/", "PostgreSQL Docs"),
    "mongodb": ("https://www.mongodb.com/docs/", "MongoDB Docs"),
    "docker": ("https://docs.docker.com/", "Docker Docs"),
    "kubernetes": ("https://kubernetes.io/docs/", "Kubernetes Docs"),
    "git": ("https://git-scm.com/doc", "Git Documentation"),
    "github": ("https://docs.github.com/", "GitHub Docs"),
    "aws": ("https://docs.aws.amazon.com/", "AWS Docs"),
    "css": ("https://developer.mozilla.org/en-US/docs/Web/CSS", "MDN CSS"),
    "html": ("https://developer.mozilla.org/en-US/docs/Web/HTML", "MDN HTML"),
    "sql": ("https://www.w3schools.com/sql/", "W3Schools SQL"),
    "vue": ("https://vuejs.org/guide/", "Vue.js Guide"),
    "angular": ("https://angular.io/docs", "Angular Docs"),
    "tailwind": ("https://tailwindcss.com/docs", "Tailwind CSS Docs"),
    "redis": ("https://redis.io/docs/", "Redis Docs"),
    "graphql": ("https://graphql.org/learn/", "GraphQL Learn"),
    "rust": ("https://doc.rust-lang.org/book/", "Rust Book"),
    "go": ("https://go.dev/doc/", "Go Documentation"),
    "java": ("https://docs.oracle.com/en/java/", "Java Docs"),
    "kotlin": ("https://kotlinlang.org/docs/", "Kotlin Docs"),
    "swift": ("https://docs.swift.org/", "Swift Docs"),
    "machine_learning": ("https://scikit-learn.org/stable/user_guide.html", "Scikit-learn Guide"),
    "tensorflow": ("https://www.tensorflow.org/learn", "TensorFlow Learn"),
    "pytorch": ("https://pytorch.org/tutorials/", "PyTorch Tutorials"),
}

# Otras formas de escribir la misma tecnología
TECH_VARIATIONS = {
    "nextjs": ["next.js", "next js"],
    "nodejs": ["node.js", "node js", "node"],
    "machine_learning": ["ml", "machine learning"],
}

SEARCH_URLS = {
    "youtube": "https://www.youtube.com/results?search_query={q}+tutorial",
    "google": "https://www.google.com/search?q={q}+tutorial",
    "stackoverflow": "https://stackoverflow.com/search?q={q}",
    "github": "https://github.com/search?q={q}&type=repositories",
    "devto": "https://dev.to/search?q={q}",
    "freecodecamp": "https://www.freecodecamp.org/news/search/?query={q}",
    "coursera": "https://www.coursera.org/search?query={q}",
}

# Si algo falla al generar, la web recibe esto
FALLBACK_RESOURCES = [
    TaskResource(type="tool", title="Search for Learning Resources",
                 url="https://www.google.com/search?q=learning+tutorial",
                 description="Search for learning resources on this topic",
                 source="Google", difficulty="beginner", is_free=True, estimated_minutes=10),
    TaskResource(type="video", title="Video Tutorials", url="https://www.youtube.com",
                 description="Find video tutorials on this subject",
                 source="YouTube", difficulty="beginner", is_free=True, estimated_minutes=30),
    TaskResource(type="tutorial", title="freeCodeCamp", url="https://www.freecodecamp.org",
                 description="Free coding tutorials and certifications",
                 source="freeCodeCamp", difficulty="beginner", is_free=True, estimated_minutes=45),
]

MAX_RESOURCES = 6
MAX_TASK_RESOURCES = 3


def search_url(platform: str, query: str) -> str:
    template = SEARCH_URLS.get(platform, SEARCH_URLS["google"])
    return template.format(q=quote(query, safe=""))


def search_query(title: str) -> str:
    """Hasta 4 palabras significativas del título"""
    words = [w for w in re.split(r"[\s\-:,]+", title) if len(w) > 2]
    return " ".join(words[:4])


def _word_in(text: str, word: str) -> bool:
    return re.search(rf"(?<![a-z0-9]){re.escape(word)}(?![a-z0-9])", text) is not None


def detect_technologies(text: str) -> list[str]:
    """
    Tecnologías de DOC_SITES mencionadas en el texto, en orden de la tabla.
    Se comparan palabras completas ("go" no coincide con "google").
    """
    text_lc = text.lower()
    detected = []
    for tech in DOC_SITES:
        variations = [tech, tech.replace("_", " "), tech.replace("_", "-")] + TECH_VARIATIONS.get(tech, [])
        if any(_word_in(text_lc, v) for v in variations):
            detected.append(tech)
    return detected


def _difficulty(level: str) -> str:
    return level if level in ("beginner", "intermediate") else "advanced"


# =============================================================================
# ===================== RECURSOS PARA EL MODAL ================================
# =============================================================================

def discover_resources(title: str, description: str, task_type: str, category: str) -> list[TaskResource]:
    """
    Lista curada para una tarea (máximo 6):
      1. Docs oficiales (hasta 2 tecnologías)
      2. Vídeos
      3. Ejemplos en GitHub (solo práctica/proyecto)
      4. Artículos
      5. Preguntas en Stack Overflow
      6. Cursos (solo teoría/repaso)
    """
    query = search_query(title)
    resources = []

    for tech in detect_technologies(f"{title} {description} {category}")[:2]:
        url, name = DOC_SITES[tech]
        resources.append(TaskResource(
            type="documentation", title=name, url=url,
            description=f"Official {tech.replace('_', ' ')} docs", source=name.split(" ")[0],
            difficulty="beginner", is_free=True, estimated_minutes=20,
        ))

    resources.append(TaskResource(
        type="video", title=f"{query} Tutorials", url=search_url("youtube", query),
        description="Video tutorials", source="YouTube",
        difficulty="beginner", is_free=True, estimated_minutes=15,
    ))

    if task_type in ("practice", "build"):
        resources.append(TaskResource(
            type="project", title=f"{query} Examples", url=search_url("github", query),
            description="Code examples & projects", source="GitHub",
            difficulty="intermediate", is_free=True, estimated_minutes=30,
        ))

    resources.append(TaskResource(
        type="article", title=f"{query} Articles", url=search_url("devto", query),
        description="Community tutorials", source="Dev.to",
        difficulty="intermediate", is_free=True, estimated_minutes=15,
    ))
    resources.append(TaskResource(
        type="tool", title=f"{query} Q&A", url=search_url("stackoverflow", query),
        description="Common questions", source="Stack Overflow",
        difficulty="intermediate", is_free=True, estimated_minutes=10,
    ))

    if task_type in ("learn", "review"):
        resources.append(TaskResource(
            type="course", title=f"Courses: {query}", url=search_url("coursera", query),
            description="Structured university courses", source="Coursera",
            difficulty="intermediate", is_free=False, estimated_minutes=60,
        ))

    return resources[:MAX_RESOURCES]


# =============================================================================
# ===================== RECURSOS INCRUSTADOS EN EL PLAN =======================
# =============================================================================

def task_resources(title: str, task_type: str, category: str, level: str) -> list[TaskResource]:
    """Versión corta (máximo 3) que se guarda dentro de cada DailyTask"""
    query = search_query(title)
    difficulty = _difficulty(level)
    resources = []

    detected = detect_technologies(f"{title} {category}")
    if detected:
        url, name = DOC_SITES[detected[0]]
        resources.append(TaskResource(type="documentation", title=name, url=url,
                                      source=name.split(" ")[0], difficulty=difficulty, is_free=True))

    if task_type in ("learn", "review"):
        resources.append(TaskResource(type="video", title=f"Learn {query}", url=search_url("youtube", query),
                                      source="YouTube", estimated_minutes=15, difficulty=difficulty, is_free=True))
    else:
        resources.append(TaskResource(type="exercise", title=f"{query} Examples", url=search_url("github", query),
                                      source="GitHub", difficulty=difficulty, is_free=True))

    resources.append(TaskResource(type="article", title=f"Guide: {query}", url=search_url("devto", query),
                                  source="Dev.to", difficulty=difficulty, is_free=True))

    return resources[:MAX_TASK_RESOURCES]
