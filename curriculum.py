"""
=============================================================================
CURRICULUM.PY — Tabla de Contenidos de los Planes
=============================================================================
Datos estáticos: categoría → 12 temas mensuales → lista ordenada de tareas.

Cada tema tiene:
  - theme   → nombre del mes ("Django Framework")
  - focus   → en qué se centra
  - topics  → 5 subtemas que rotan en las descripciones
  - project → proyecto del mes
  - tasks   → títulos de tareas, en orden

Además decide QUÉ currículum usar para un objetivo escrito a mano:
  1. Palabras clave de backend (django, api, sql...) → "backend"
  2. Si no, nombre de categoría contenido en el objetivo/categoría
  3. Si no, el currículum por defecto ("python")
"""

# ─────────────────────────────────────────────────────────────────────────────
# CURRÍCULUMS
# ─────────────────────────────────────────────────────────────────────────────

CURRICULA = {
    "backend": {
      "themes": [
        {
          "theme": "Core Foundations",
          "focus": "Python fundamentals and version control",
          "topics": ["Python OOP", "async/await", "decorators", "typing", "Git & GitHub"],
          "project": "Build a CLI tool with proper OOP structure",
          "tasks": [
            "Learn Python classes and __init__ methods",
            "Practice Python inheritance and method overriding",
            "Implement Python decorators for logging",
            "Master Python async/await with asyncio",
            "Add type hints to existing Python code",
            "Set up Git repository with .gitignore",
            "Create meaningful Git commits with proper messages",
            "Practice Git branching and merging",
            "Open your first Pull Request on GitHub",
            "Review Python virtual environments (venv)",
            "Understand Python packages and modules",
            "Implement context managers with __enter__/__exit__",
            "Build: CLI Task Manager with OOP",
            "Add async file operations to your CLI",
            "Write Python unit tests with pytest",
            "Practice: Git rebase and conflict resolution",
            "Create GitHub Actions workflow for linting",
            "Implement Python dataclasses for models",
            "Master Python generators and iterators",
            "Build: GitHub-integrated Python project",
            "Review: Python best practices and PEP8",
            "Document your code with docstrings"
          ]
        },
        {
          "theme": "Web & HTTP Basics",
          "focus": "HTTP protocol and REST principles",
          "topics": ["HTTP methods", "Status codes", "REST principles", "JSON", "Client-server"],
          "project": "Build a REST API documentation page",
          "tasks": [
            "Study HTTP request/response cycle",
            "Learn GET, POST, PUT, DELETE, PATCH methods",
            "Understand HTTP status codes (200, 201, 400, 401, 404, 500)",
            "Practice: Make HTTP requests with Python requests library",
            "Learn REST API design principles",
            "Implement proper REST resource naming",
            "Work with JSON serialization/deserialization",
            "Study API versioning strategies",
            "Practice: Parse complex JSON responses",
            "Learn about HTTP headers and content types",
            "Understand cookies and sessions",
            "Study CORS and cross-origin requests",
            "Implement request retry logic",
            "Learn API rate limiting concepts",
            "Practice: Build HTTP client wrapper class",
            "Study API authentication methods overview",
            "Learn URL encoding and query parameters",
            "Practice: Handle HTTP errors gracefully",
            "Build: REST API specification document",
            "Study OpenAPI/Swagger basics",
            "Review: HTTP protocol fundamentals",
            "Quiz: REST principles assessment"
          ]
        },
        {
          "theme": "Django Framework",
          "focus": "Django project structure and ORM",
          "topics": ["Django setup", "Models & ORM", "Views", "Templates", "Admin"],
          "project": "Build a blog with Django",
          "tasks": [
            "Set up Django project with proper structure",
            "Create Django apps and understand app structure",
            "Define Django models with field types",
            "Practice: Django ORM queries (filter, exclude, annotate)",
            "Create Django migrations and apply them",
            "Build Django views with function-based views",
            "Implement Django class-based views",
            "Create Django templates with inheritance",
            "Set up Django admin with customization",
            "Learn Django URL routing patterns",
            "Implement Django forms for user input",
            "Add model relationships (ForeignKey, ManyToMany)",
            "Practice: Complex ORM queries with Q objects",
            "Build: Blog models (Post, Category, Tag)",
            "Implement Django pagination",
            "Add Django static files handling",
            "Create custom Django management commands",
            "Build: Blog views and templates",
            "Implement Django signals for notifications",
            "Add Django middleware basics",
            "Build: Complete blog with comments",
            "Review: Django best practices"
          ]
        },
        {
          "theme": "FastAPI Framework",
          "focus": "Modern async Python API development",
          "topics": ["FastAPI setup", "Path operations", "Pydantic", "Dependency injection", "Async"],
          "project": "Build a CRUD API with FastAPI",
          "tasks": [
            "Set up FastAPI project with uvicorn",
            "Create path operations (GET, POST, PUT, DELETE)",
            "Define Pydantic models for validation",
            "Implement path parameters and query params",
            "Use Pydantic for request body validation",
            "Add response models with Pydantic",
            "Implement FastAPI dependency injection",
            "Create reusable dependencies",
            "Add async database operations",
            "Implement FastAPI exception handlers",
            "Use FastAPI background tasks",
            "Add API documentation with OpenAPI",
            "Implement FastAPI middleware",
            "Build: User CRUD endpoints",
            "Add request validation with Pydantic validators",
            "Implement FastAPI routers for organization",
            "Add response status codes properly",
            "Build: Complete CRUD API",
            "Implement API pagination patterns",
            "Add filtering and sorting to endpoints",
            "Build: Production-ready FastAPI structure",
            "Review: FastAPI vs Django comparison"
          ]
        },
        {
          "theme": "Databases",
          "focus": "SQL and database integration",
          "topics": ["SQL fundamentals", "PostgreSQL", "SQLAlchemy", "Migrations", "Data modeling"],
          "project": "Build a database-backed application",
          "tasks": [
            "Learn SQL SELECT with WHERE clauses",
            "Practice SQL JOINs (INNER, LEFT, RIGHT)",
            "Implement SQL INSERT, UPDATE, DELETE",
            "Set up PostgreSQL database locally",
            "Learn PostgreSQL-specific features",
            "Practice: Complex SQL queries with subqueries",
            "Set up SQLAlchemy with FastAPI",
            "Define SQLAlchemy models",
            "Implement SQLAlchemy relationships",
            "Practice: SQLAlchemy queries",
            "Set up Alembic for migrations",
            "Create and apply database migrations",
            "Learn database indexing strategies",
            "Implement database transactions",
            "Practice: Connection pooling setup",
            "Add database seeding scripts",
            "Build: Data models for e-commerce",
            "Implement database backup strategies",
            "Learn query optimization techniques",
            "Practice: EXPLAIN ANALYZE for queries",
            "Build: Complete database layer",
            "Review: Database best practices"
          ]
        },
        {
          "theme": "Authentication & Security",
          "focus": "Secure API development",
          "topics": ["Password hashing", "JWT tokens", "OAuth2", "CORS/CSRF", "HTTPS"],
          "project": "Build secure authentication system",
          "tasks": [
            "Learn password hashing with bcrypt",
            "Implement user registration with hashed passwords",
            "Understand JWT token structure",
            "Create JWT access and refresh tokens",
            "Implement JWT authentication middleware",
            "Add protected routes with JWT",
            "Learn OAuth2 flow concepts",
            "Implement OAuth2 with FastAPI",
            "Add social login (Google OAuth)",
            "Learn CSRF protection strategies",
            "Implement CORS properly",
            "Set up HTTPS with SSL certificates",
            "Learn rate limiting implementation",
            "Add API key authentication",
            "Study OWASP Top 10 vulnerabilities",
            "Implement SQL injection prevention",
            "Add XSS protection measures",
            "Practice: Security audit of your API",
            "Implement secure password reset flow",
            "Add two-factor authentication basics",
            "Build: Complete auth system",
            "Review: Security best practices"
          ]
        },
        {
          "theme": "APIs & Integrations",
          "focus": "Building and consuming APIs",
          "topics": ["REST APIs", "Third-party APIs", "WebSockets", "Webhooks", "GraphQL basics"],
          "project": "Build API with third-party integrations",
          "tasks": [
            "Design RESTful API endpoints",
            "Implement CRUD with proper REST conventions",
            "Add API filtering and search",
            "Implement cursor-based pagination",
            "Integrate with Stripe API for payments",
            "Add email sending with SendGrid/SMTP",
            "Integrate SMS with Twilio",
            "Implement webhooks receiver",
            "Create webhook sender for events",
            "Learn WebSocket basics",
            "Implement real-time chat with WebSockets",
            "Add GraphQL endpoint (Strawberry)",
            "Practice: GraphQL queries and mutations",
            "Build: Notification service",
            "Implement file upload endpoints",
            "Add AWS S3 integration for files",
            "Create API versioning strategy",
            "Implement API documentation",
            "Build: Integration hub service",
            "Add retry logic for external APIs",
            "Implement circuit breaker pattern",
            "Review: API design best practices"
          ]
        },
        {
          "theme": "Testing & Debugging",
          "focus": "Quality assurance and debugging",
          "topics": ["pytest", "Unit tests", "Integration tests", "Mocking", "TDD basics"],
          "project": "Build comprehensive test suite",
          "tasks": [
            "Set up pytest for your project",
            "Write first unit tests with pytest",
            "Learn pytest fixtures",
            "Implement parametrized tests",
            "Practice: Test Django views",
            "Practice: Test FastAPI endpoints",
            "Learn mocking with unittest.mock",
            "Mock external API calls in tests",
            "Implement integration tests",
            "Set up test database fixtures",
            "Learn test coverage with pytest-cov",
            "Achieve 80%+ test coverage",
            "Implement TDD for new feature",
            "Learn debugging with pdb/ipdb",
            "Practice: Debug complex issues",
            "Add logging to your application",
            "Implement structured logging",
            "Set up Sentry for error tracking",
            "Build: Test suite for auth system",
            "Add API contract testing",
            "Implement load testing basics",
            "Review: Testing best practices"
          ]
        },
        {
          "theme": "DevOps & Deployment",
          "focus": "Containerization and CI/CD",
          "topics": ["Docker", "Docker Compose", "CI/CD", "Nginx", "Environment variables"],
          "project": "Deploy application to production",
          "tasks": [
            "Learn Docker basics and concepts",
            "Write Dockerfile for Python app",
            "Build and run Docker containers",
            "Create Docker Compose for multi-service",
            "Add PostgreSQL to Docker Compose",
            "Implement Docker volumes for persistence",
            "Learn Docker networking basics",
            "Set up GitHub Actions workflow",
            "Add automated testing in CI",
            "Implement build and push to registry",
            "Learn Nginx as reverse proxy",
            "Configure Gunicorn for production",
            "Configure Uvicorn for FastAPI",
            "Deploy to Railway/Render",
            "Set up environment variables properly",
            "Implement secrets management",
            "Add health check endpoints",
            "Set up monitoring with logs",
            "Learn Kubernetes basics overview",
            "Build: Complete CI/CD pipeline",
            "Implement zero-downtime deployment",
            "Review: DevOps best practices"
          ]
        },
        {
          "theme": "Software Engineering",
          "focus": "Clean code and architecture",
          "topics": ["SOLID principles", "Design patterns", "Project structure", "Logging", "Documentation"],
          "project": "Refactor project with best practices",
          "tasks": [
            "Learn Single Responsibility Principle",
            "Apply Open/Closed Principle",
            "Implement Liskov Substitution",
            "Practice Interface Segregation",
            "Apply Dependency Inversion",
            "Learn Repository pattern",
            "Implement Service layer pattern",
            "Apply Factory pattern",
            "Learn Singleton pattern uses",
            "Structure project for scalability",
            "Implement clean architecture layers",
            "Add comprehensive logging",
            "Set up ELK stack basics",
            "Write API documentation",
            "Create README with setup guide",
            "Add inline code documentation",
            "Implement feature flags",
            "Learn microservices basics",
            "Build: Refactor to clean architecture",
            "Add performance monitoring",
            "Implement caching strategy",
            "Review: Architecture decisions"
          ]
        },
        {
          "theme": "Advanced Backend",
          "focus": "Scalability and advanced patterns",
          "topics": ["Celery", "Redis", "Message queues", "Caching", "Microservices"],
          "project": "Build scalable background job system",
          "tasks": [
            "Set up Redis locally",
            "Implement Redis caching in API",
            "Learn Celery task queue basics",
            "Create Celery tasks for async jobs",
            "Implement periodic tasks with Celery Beat",
            "Add task retry and error handling",
            "Learn message broker concepts",
            "Set up RabbitMQ basics",
            "Implement pub/sub patterns",
            "Add email queue with Celery",
            "Learn caching strategies",
            "Implement cache invalidation",
            "Study microservices architecture",
            "Learn API Gateway patterns",
            "Implement service discovery basics",
            "Add distributed tracing concepts",
            "Learn load balancing basics",
            "Build: Background job processor",
            "Implement event-driven patterns",
            "Add async notification system",
            "Build: Scalable task system",
            "Review: Scalability patterns"
          ]
        },
        {
          "theme": "Portfolio & Career",
          "focus": "Job readiness and portfolio",
          "topics": ["Portfolio projects", "Resume", "Interview prep", "System design", "Networking"],
          "project": "Complete portfolio and job prep",
          "tasks": [
            "Review all projects for portfolio",
            "Polish GitHub profile and repos",
            "Write compelling README files",
            "Create portfolio website",
            "Prepare backend developer resume",
            "Practice coding interview questions",
            "Study system design basics",
            "Practice: Design URL shortener",
            "Practice: Design rate limiter",
            "Learn common interview patterns",
            "Practice: SQL interview questions",
            "Review Django interview questions",
            "Review FastAPI interview questions",
            "Practice: API design interview",
            "Mock interview: Technical questions",
            "Mock interview: System design",
            "Network on LinkedIn/Twitter",
            "Contribute to open source",
            "Apply to backend developer roles",
            "Prepare for behavioral interviews",
            "Final review: All concepts",
            "Celebrate: You're job ready!"
          ]
        },
      ],
    },
    "python": {
      "themes": [
        {
          "theme": "Python Fundamentals",
          "focus": "Core syntax and basic concepts",
          "topics": ["Variables & Types", "Operators", "Input/Output", "Strings", "Numbers"],
          "project": "Build a calculator",
          "tasks": [
            "Learn Python variables and naming conventions",
            "Practice Python data types (int, float, str, bool)",
            "Master Python arithmetic operators",
            "Implement comparison and logical operators",
            "Use input() and print() for user interaction",
            "Practice string methods (split, join, strip)",
            "Format strings with f-strings",
            "Work with Python numbers and math module",
            "Implement type conversion functions",
            "Practice: Build temperature converter",
            "Learn Python comments and documentation",
            "Understand Python indentation rules",
            "Practice: Create BMI calculator",
            "Master string slicing and indexing",
            "Build: Interactive calculator with operations",
            "Implement error messages for invalid input",
            "Add calculation history feature",
            "Practice: Number guessing game",
            "Learn Python REPL for testing",
            "Build: Complete calculator with menu",
            "Review: Python fundamentals quiz",
            "Document your calculator code"
          ]
        },
        {
          "theme": "Control Flow",
          "focus": "Decision making and loops",
          "topics": ["If/Else", "For Loops", "While Loops", "Break/Continue", "Nested Logic"],
          "project": "Number guessing game",
          "tasks": [
            "Learn Python if statements",
            "Practice if/elif/else chains",
            "Implement nested conditionals",
            "Master Python for loops with range()",
            "Iterate over lists and strings",
            "Learn Python while loops",
            "Implement loop control with break",
            "Use continue for loop skipping",
            "Practice: FizzBuzz solution",
            "Build nested loops for patterns",
            "Implement password validation logic",
            "Practice: Prime number checker",
            "Build: Number guessing with hints",
            "Add difficulty levels to game",
            "Implement play again feature",
            "Practice: Rock Paper Scissors game",
            "Build: Simple ATM simulator",
            "Add input validation loops",
            "Practice: Multiplication table generator",
            "Build: Menu-driven application",
            "Review: Control flow patterns",
            "Complete: Number guessing game"
          ]
        },
        {
          "theme": "Data Structures",
          "focus": "Working with collections",
          "topics": ["Lists", "Tuples", "Dictionaries", "Sets", "List Comprehensions"],
          "project": "Contact book app",
          "tasks": [
            "Learn Python lists and methods",
            "Practice list slicing and indexing",
            "Implement list sorting and reversing",
            "Master Python tuples and immutability",
            "Learn Python dictionaries",
            "Practice dict methods (get, keys, values)",
            "Implement nested dictionaries",
            "Master Python sets and operations",
            "Practice: Remove duplicates with sets",
            "Learn list comprehensions",
            "Build: Data filtering with comprehensions",
            "Implement dictionary comprehensions",
            "Practice: Word frequency counter",
            "Build: Contact storage with dicts",
            "Add search functionality to contacts",
            "Implement contact editing",
            "Add contact deletion",
            "Build: Export contacts to text file",
            "Practice: Student grade tracker",
            "Implement sorting and filtering",
            "Build: Complete contact book app",
            "Review: Data structures quiz"
          ]
        },
        {
          "theme": "Functions & Modules",
          "focus": "Code organization",
          "topics": ["Functions", "Parameters", "Return Values", "Modules", "Packages"],
          "project": "Utility library",
          "tasks": [
            "Learn Python function definition",
            "Practice function parameters",
            "Implement default parameter values",
            "Master *args and **kwargs",
            "Learn return statements",
            "Practice: Calculator functions",
            "Implement helper functions",
            "Learn variable scope (local/global)",
            "Create reusable utility functions",
            "Practice: String utility functions",
            "Build: Math utility module",
            "Learn Python import statements",
            "Practice importing from modules",
            "Create custom Python package",
            "Implement __init__.py for packages",
            "Learn Python standard library",
            "Use os and sys modules",
            "Practice: Date utility functions",
            "Build: File utility functions",
            "Implement validation utilities",
            "Build: Complete utility library",
            "Document your library with docstrings"
          ]
        },
        {
          "theme": "Object-Oriented Programming",
          "focus": "OOP principles",
          "topics": ["Classes", "Objects", "Inheritance", "Polymorphism", "Encapsulation"],
          "project": "Bank account system",
          "tasks": [
            "Learn Python class definition",
            "Create __init__ constructor method",
            "Implement instance attributes",
            "Add instance methods to class",
            "Practice: Create Person class",
            "Learn class inheritance",
            "Implement parent and child classes",
            "Override methods in child class",
            "Practice: Animal class hierarchy",
            "Learn encapsulation with _ and __",
            "Implement property decorators",
            "Add getter and setter methods",
            "Practice: Rectangle class with properties",
            "Learn polymorphism concepts",
            "Implement method polymorphism",
            "Build: BankAccount class",
            "Add SavingsAccount subclass",
            "Implement transaction history",
            "Add transfer between accounts",
            "Build: Complete banking system",
            "Add account validation logic",
            "Review: OOP concepts quiz"
          ]
        },
        {
          "theme": "File Handling & Exceptions",
          "focus": "Working with files and errors",
          "topics": ["File Read/Write", "CSV", "JSON", "Try/Except", "Custom Exceptions"],
          "project": "File organizer",
          "tasks": [
            "Learn file opening modes (r, w, a)",
            "Read files with open() and read()",
            "Write to files with write()",
            "Use context managers (with statement)",
            "Practice: Log file writer",
            "Learn CSV file handling",
            "Use csv module for reading",
            "Write data to CSV files",
            "Learn JSON file handling",
            "Parse JSON with json module",
            "Write JSON data to files",
            "Implement try/except blocks",
            "Handle specific exceptions",
            "Use finally for cleanup",
            "Create custom exception classes",
            "Practice: Robust file reader",
            "Build: File extension organizer",
            "Add directory walking with os",
            "Implement file moving logic",
            "Add logging for operations",
            "Build: Complete file organizer",
            "Review: File handling patterns"
          ]
        },
        {
          "theme": "Advanced Python",
          "focus": "Intermediate concepts",
          "topics": ["Decorators", "Generators", "Context Managers", "Lambda", "Map/Filter"],
          "project": "Text processor",
          "tasks": [
            "Learn Python decorators basics",
            "Create simple decorator function",
            "Implement decorator with arguments",
            "Practice: Timing decorator",
            "Learn Python generators",
            "Create generator functions with yield",
            "Use generators for large data",
            "Practice: Fibonacci generator",
            "Learn context manager protocol",
            "Create custom context manager",
            "Practice: Database connection manager",
            "Learn lambda functions",
            "Use map() with lambdas",
            "Use filter() for data filtering",
            "Practice: reduce() for aggregation",
            "Build: Text file reader generator",
            "Implement word frequency counter",
            "Add text cleaning functions",
            "Build: Sentence tokenizer",
            "Implement text statistics",
            "Build: Complete text processor",
            "Review: Advanced Python concepts"
          ]
        },
        {
          "theme": "Web & API Basics",
          "focus": "HTTP and APIs",
          "topics": ["Requests library", "REST APIs", "JSON parsing", "Authentication", "Error handling"],
          "project": "Weather app",
          "tasks": [
            "Install and learn requests library",
            "Make GET requests to APIs",
            "Handle API responses",
            "Parse JSON API responses",
            "Practice: Fetch random quote API",
            "Learn API authentication basics",
            "Add headers to requests",
            "Implement API key authentication",
            "Handle HTTP errors properly",
            "Practice: GitHub API explorer",
            "Learn POST requests",
            "Send JSON data to APIs",
            "Implement retry logic",
            "Practice: Create API wrapper class",
            "Build: Weather API integration",
            "Add location-based weather",
            "Implement forecast display",
            "Add error handling for API",
            "Build: Weather caching",
            "Create weather CLI interface",
            "Build: Complete weather app",
            "Review: API integration patterns"
          ]
        },
        {
          "theme": "Database Integration",
          "focus": "Working with databases",
          "topics": ["SQLite", "SQL queries", "Python DB-API", "CRUD operations", "Data modeling"],
          "project": "Todo database app",
          "tasks": [
            "Learn SQL basics overview",
            "Set up SQLite with Python",
            "Create database and tables",
            "Learn SQL CREATE TABLE syntax",
            "Implement INSERT queries",
            "Practice SELECT with WHERE",
            "Learn UPDATE and DELETE",
            "Use Python sqlite3 module",
            "Implement database connection",
            "Create cursor and execute queries",
            "Practice: User database CRUD",
            "Learn parameterized queries",
            "Prevent SQL injection",
            "Build: Todo table schema",
            "Implement add todo function",
            "Add list todos function",
            "Implement update todo status",
            "Add delete todo function",
            "Build: Todo CLI interface",
            "Add due dates and priorities",
            "Build: Complete todo app",
            "Review: Database patterns"
          ]
        },
        {
          "theme": "Project Development",
          "focus": "Building real applications",
          "topics": ["Project structure", "Virtual environments", "Requirements", "Documentation", "Git"],
          "project": "CLI application",
          "tasks": [
            "Learn Python project structure",
            "Create virtual environment",
            "Manage dependencies with pip",
            "Create requirements.txt",
            "Practice: Set up project scaffold",
            "Learn Git for Python projects",
            "Create meaningful .gitignore",
            "Practice Git commit workflow",
            "Add README documentation",
            "Learn argparse for CLI",
            "Implement CLI arguments",
            "Add subcommands to CLI",
            "Practice: Note-taking CLI",
            "Implement configuration files",
            "Add logging to application",
            "Create setup.py or pyproject.toml",
            "Build: Installable CLI package",
            "Add command autocompletion",
            "Implement progress bars",
            "Add colorful CLI output",
            "Build: Complete CLI application",
            "Review: Project best practices"
          ]
        },
        {
          "theme": "Testing & Quality",
          "focus": "Code quality practices",
          "topics": ["Unit testing", "pytest", "Mocking", "Coverage", "Type hints"],
          "project": "Test suite",
          "tasks": [
            "Learn unit testing concepts",
            "Set up pytest in project",
            "Write first pytest test",
            "Learn pytest assertions",
            "Practice: Test calculator functions",
            "Learn pytest fixtures",
            "Create reusable test fixtures",
            "Practice: Test file operations",
            "Learn mocking with unittest.mock",
            "Mock external dependencies",
            "Practice: Mock API calls in tests",
            "Learn test coverage",
            "Set up pytest-cov",
            "Achieve 80%+ coverage",
            "Learn Python type hints",
            "Add type annotations to functions",
            "Use typing module types",
            "Practice: Type hint existing code",
            "Learn mypy for type checking",
            "Build: Test suite for todo app",
            "Add pre-commit hooks",
            "Review: Testing best practices"
          ]
        },
        {
          "theme": "Portfolio & Review",
          "focus": "Consolidation and showcase",
          "topics": ["Code review", "Refactoring", "Portfolio", "Best practices", "Job prep"],
          "project": "Portfolio project",
          "tasks": [
            "Review all completed projects",
            "Refactor code for readability",
            "Apply PEP 8 style guide",
            "Add comprehensive docstrings",
            "Polish GitHub repositories",
            "Create portfolio README",
            "Build portfolio website",
            "Write project case studies",
            "Practice Python interview questions",
            "Review data structures problems",
            "Practice algorithm problems",
            "Mock coding interview",
            "Update resume with Python skills",
            "Network with Python community",
            "Contribute to open source",
            "Review: Python fundamentals",
            "Review: OOP concepts",
            "Review: File and database handling",
            "Review: API integration",
            "Final project: Combine all skills",
            "Prepare for job applications",
            "Celebrate: Python mastery!"
          ]
        },
      ],
    },
    "javascript": {
      "themes": [
        {
          "theme": "JavaScript Fundamentals",
          "focus": "Core syntax and basics",
          "topics": ["Variables", "Data Types", "Operators", "Console", "Comments"],
          "project": "Interactive webpage",
          "tasks": [
            "Learn JavaScript variables (let, const, var)",
            "Practice JavaScript data types",
            "Master JavaScript operators",
            "Use console.log() for debugging",
            "Write meaningful JavaScript comments",
            "Practice: Temperature converter",
            "Learn JavaScript string methods",
            "Implement template literals",
            "Work with JavaScript numbers",
            "Practice: Simple calculator logic",
            "Learn JavaScript type coercion",
            "Use typeof operator",
            "Practice: User input validation",
            "Build: Interactive greeting page",
            "Add user name personalization",
            "Implement basic form handling",
            "Practice: Mad Libs generator",
            "Add dynamic content updates",
            "Build: Unit converter webpage",
            "Implement multiple conversions",
            "Build: Complete interactive page",
            "Review: JavaScript fundamentals"
          ]
        },
        {
          "theme": "Control Flow & Functions",
          "focus": "Logic and functions",
          "topics": ["If/Else", "Loops", "Functions", "Arrow functions", "Scope"],
          "project": "Quiz game",
          "tasks": [
            "Learn JavaScript if/else statements",
            "Implement switch statements",
            "Master JavaScript for loops",
            "Use while and do-while loops",
            "Practice: FizzBuzz in JavaScript",
            "Learn JavaScript functions",
            "Implement arrow functions",
            "Understand function scope",
            "Learn closures basics",
            "Practice: Calculator functions",
            "Implement callback functions",
            "Build: Number guessing game",
            "Add score tracking",
            "Implement timer countdown",
            "Practice: Rock Paper Scissors",
            "Build: Quiz question display",
            "Add answer validation",
            "Implement score calculation",
            "Add high score storage",
            "Build: Multiple choice quiz",
            "Add quiz progression",
            "Build: Complete quiz game"
          ]
        },
        {
          "theme": "Arrays & Objects",
          "focus": "JavaScript data structures",
          "topics": ["Arrays", "Array methods", "Objects", "Destructuring", "Spread operator"],
          "project": "Shopping cart",
          "tasks": [
            "Learn JavaScript arrays",
            "Master array methods (push, pop, shift)",
            "Use forEach, map, filter",
            "Implement array reduce",
            "Practice: Array manipulation exercises",
            "Learn JavaScript objects",
            "Access object properties",
            "Implement object methods",
            "Practice: Object manipulation",
            "Learn destructuring assignment",
            "Use spread operator",
            "Practice: Rest parameters",
            "Build: Product catalog object",
            "Implement cart array logic",
            "Add item to cart function",
            "Remove item from cart",
            "Calculate cart total",
            "Implement quantity updates",
            "Add cart item filtering",
            "Build: Cart summary display",
            "Implement checkout logic",
            "Build: Complete shopping cart"
          ]
        },
        {
          "theme": "DOM Manipulation",
          "focus": "Interactive web pages",
          "topics": ["Selectors", "Events", "Event handling", "Dynamic content", "Forms"],
          "project": "Interactive form",
          "tasks": [
            "Learn document.querySelector()",
            "Use querySelectorAll() for multiple",
            "Modify element content with textContent",
            "Change styles with style property",
            "Add/remove CSS classes",
            "Learn event listeners",
            "Handle click events",
            "Implement form submit handling",
            "Practice: Button click counter",
            "Build: Theme toggle button",
            "Create elements with createElement",
            "Append elements to DOM",
            "Remove elements from DOM",
            "Practice: Dynamic list builder",
            "Build: Form validation logic",
            "Add real-time validation feedback",
            "Implement error messages",
            "Style validation states",
            "Add input event listeners",
            "Build: Multi-step form",
            "Implement form progress",
            "Build: Complete interactive form"
          ]
        },
        {
          "theme": "Async JavaScript",
          "focus": "Asynchronous programming",
          "topics": ["Promises", "Async/Await", "Fetch API", "Error handling", "API integration"],
          "project": "Weather dashboard",
          "tasks": [
            "Understand JavaScript event loop",
            "Learn setTimeout and setInterval",
            "Master JavaScript Promises",
            "Use .then() and .catch()",
            "Practice: Promise chaining",
            "Learn async/await syntax",
            "Convert promises to async/await",
            "Implement error handling with try/catch",
            "Learn Fetch API basics",
            "Make GET requests with fetch",
            "Handle fetch errors properly",
            "Parse JSON responses",
            "Practice: Random quote fetcher",
            "Build: Weather API integration",
            "Display current weather",
            "Add location search",
            "Implement weather icons",
            "Add forecast display",
            "Handle loading states",
            "Implement error states",
            "Build: Weather dashboard",
            "Review: Async patterns"
          ]
        },
        {
          "theme": "Modern JavaScript",
          "focus": "ES6+ features",
          "topics": ["Classes", "Modules", "Template literals", "Map/Set", "Symbols"],
          "project": "Module-based app",
          "tasks": [
            "Learn JavaScript ES6 classes",
            "Implement class constructors",
            "Add class methods",
            "Practice: Class inheritance",
            "Learn static methods",
            "Use getters and setters",
            "Practice: Bank account class",
            "Learn JavaScript modules",
            "Use export and import",
            "Implement default exports",
            "Learn Map data structure",
            "Use Set for unique values",
            "Practice: Map/Set exercises",
            "Understand JavaScript Symbols",
            "Learn iterator protocol",
            "Practice: Custom iterable",
            "Build: Modular project structure",
            "Create utility modules",
            "Implement data modules",
            "Add UI modules",
            "Build: Complete modular app",
            "Review: ES6+ features"
          ]
        },
        {
          "theme": "React Fundamentals",
          "focus": "React basics",
          "topics": ["Components", "JSX", "Props", "State", "Events"],
          "project": "React todo app",
          "tasks": [
            "Set up React with Vite",
            "Understand React component structure",
            "Learn JSX syntax",
            "Create functional components",
            "Pass data with props",
            "Practice: Component composition",
            "Learn useState hook",
            "Implement state updates",
            "Handle events in React",
            "Practice: Counter component",
            "Build: Todo input component",
            "Create todo list component",
            "Implement add todo",
            "Add toggle complete",
            "Implement delete todo",
            "Add todo filtering",
            "Style React components",
            "Add CSS modules",
            "Implement conditional rendering",
            "Build: Todo statistics",
            "Build: Complete React todo",
            "Review: React fundamentals"
          ]
        },
        {
          "theme": "React Advanced",
          "focus": "Advanced React patterns",
          "topics": ["Hooks", "Context", "useEffect", "Custom hooks", "Performance"],
          "project": "Dashboard app",
          "tasks": [
            "Master useEffect hook",
            "Handle side effects properly",
            "Clean up with useEffect return",
            "Learn useContext hook",
            "Create Context providers",
            "Consume context in components",
            "Learn useReducer for complex state",
            "Implement reducer pattern",
            "Practice: Shopping cart context",
            "Create custom hooks",
            "Extract reusable hook logic",
            "Practice: useFetch custom hook",
            "Learn React.memo optimization",
            "Use useCallback for functions",
            "Implement useMemo for values",
            "Build: Dashboard layout",
            "Add data fetching",
            "Implement loading states",
            "Add error boundaries",
            "Build: Interactive charts",
            "Build: Complete dashboard",
            "Review: Advanced React patterns"
          ]
        },
        {
          "theme": "Node.js & APIs",
          "focus": "Backend JavaScript",
          "topics": ["Node.js", "Express", "REST APIs", "Middleware", "Database"],
          "project": "API server",
          "tasks": [
            "Set up Node.js project",
            "Learn Node.js modules",
            "Use npm for packages",
            "Install and set up Express",
            "Create Express application",
            "Implement GET routes",
            "Add POST routes",
            "Implement PUT and DELETE",
            "Learn Express middleware",
            "Add body-parser middleware",
            "Implement CORS middleware",
            "Practice: Request logging middleware",
            "Connect to MongoDB",
            "Define Mongoose schemas",
            "Implement CRUD operations",
            "Add input validation",
            "Implement error handling",
            "Build: User API endpoints",
            "Add authentication middleware",
            "Implement JWT tokens",
            "Build: Complete REST API",
            "Review: Backend patterns"
          ]
        },
        {
          "theme": "Full Stack Integration",
          "focus": "Connecting frontend and backend",
          "topics": ["API calls", "Authentication", "State management", "Deployment", "Error handling"],
          "project": "Full stack app",
          "tasks": [
            "Connect React to Express API",
            "Handle CORS properly",
            "Implement API service layer",
            "Add loading and error states",
            "Practice: User registration flow",
            "Implement login functionality",
            "Store JWT tokens properly",
            "Add protected routes in React",
            "Implement token refresh",
            "Learn Redux basics",
            "Set up Redux store",
            "Implement Redux actions",
            "Practice: Global state management",
            "Build: Auth state with Redux",
            "Add API error handling",
            "Implement optimistic updates",
            "Build: Full stack todo app",
            "Deploy backend to Railway",
            "Deploy frontend to Vercel",
            "Configure environment variables",
            "Build: Production deployment",
            "Review: Full stack patterns"
          ]
        },
        {
          "theme": "Testing & Tools",
          "focus": "Development practices",
          "topics": ["Jest", "React Testing Library", "Debugging", "Linting", "Build tools"],
          "project": "Test suite",
          "tasks": [
            "Set up Jest in project",
            "Write first Jest tests",
            "Learn Jest matchers",
            "Practice: Test utility functions",
            "Set up React Testing Library",
            "Test React components",
            "Learn screen queries",
            "Implement user event testing",
            "Practice: Test form components",
            "Mock API calls in tests",
            "Learn snapshot testing",
            "Set up ESLint for React",
            "Configure Prettier",
            "Add husky pre-commit hooks",
            "Learn Chrome DevTools",
            "Debug React with DevTools",
            "Understand Vite build process",
            "Optimize bundle size",
            "Build: Test suite for todo app",
            "Achieve good test coverage",
            "Add CI with GitHub Actions",
            "Review: Testing best practices"
          ]
        },
        {
          "theme": "Portfolio & Deployment",
          "focus": "Launch and showcase",
          "topics": ["Portfolio", "Deployment", "CI/CD", "Best practices", "Interview prep"],
          "project": "Final portfolio",
          "tasks": [
            "Review all completed projects",
            "Refactor code for quality",
            "Add TypeScript to projects",
            "Update GitHub repositories",
            "Write compelling READMEs",
            "Build portfolio website",
            "Deploy portfolio to Vercel",
            "Add project case studies",
            "Practice JavaScript interviews",
            "Review data structure problems",
            "Practice React interview questions",
            "Review Node.js concepts",
            "Practice system design basics",
            "Mock technical interview",
            "Update resume with skills",
            "Network on LinkedIn",
            "Contribute to open source",
            "Review: JavaScript fundamentals",
            "Review: React patterns",
            "Final project presentation",
            "Apply to developer roles",
            "Celebrate: JavaScript mastery!"
          ]
        },
      ],
    },
}

DEFAULT_CURRICULUM = "python"

# Tienen prioridad sobre el nombre de la categoría: "django" siempre es backend
BACKEND_KEYWORDS = ["backend", "django", "fastapi", "flask", "api", "server", "rest", "database", "sql"]


# =============================================================================
# ===================== SELECCIÓN DEL CURRÍCULUM ==============================
# =============================================================================

def match_curriculum(goal: str, category: str = "") -> str:
    """
    Devuelve la clave del currículum que mejor encaja con el objetivo.

    Orden de prioridad:
      1. Palabra clave de backend en el objetivo o en la categoría
      2. Clave de currículum contenida en la categoría o el objetivo
      3. DEFAULT_CURRICULUM
    """
    goal_lc = (goal or "").lower()
    category_lc = (category or "").lower()

    if any(k in goal_lc or k in category_lc for k in BACKEND_KEYWORDS):
        return "backend"

    for key in CURRICULA:
        if key in category_lc or key in goal_lc:
            return key

    return DEFAULT_CURRICULUM


def task_type_by_index(index: int) -> str:
    """Las primeras 8 tareas de un tema son teoría, las 8 siguientes práctica"""
    if index < 8:
        return "learn"
    if index < 16:
        return "practice"
    return "build"


def monthly_themes(key: str) -> list[dict]:
    """Los 12 temas mensuales del currículum, sin la lista de tareas"""
    return [
        {
            "month": i + 1,
            "theme": theme["theme"],
            "focus": theme["focus"],
            "topics": list(theme["topics"]),
            "project": theme["project"],
        }
        for i, theme in enumerate(CURRICULA[key]["themes"])
    ]


def flatten_tasks(key: str) -> list[dict]:
    """
    Aplana el currículum en una única lista ordenada de tareas.

    Cada tarea lleva el mes de su tema (theme_month), su tipo según
    la posición dentro del tema y una descripción con el subtema rotado.
    """
    flat = []
    for month_index, theme in enumerate(CURRICULA[key]["themes"]):
        topics = theme["topics"]
        for index, title in enumerate(theme["tasks"]):
            topic = topics[index % len(topics)]
            flat.append({
                "title": title,
                "description": f"Part of {theme['theme']}: {theme['focus']}. Topic: {topic}",
                "type": task_type_by_index(index),
                "topic": topic,
                "theme_month": month_index + 1,
            })
    return flat
