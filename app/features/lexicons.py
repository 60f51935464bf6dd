"""Curated term lists shared by the parser, classifier, matcher and aggregator."""

from __future__ import annotations

DOMAIN_INDICATORS: dict[str, tuple[str, ...]] = {
    "software": (
        "software engineer",
        "software developer",
        "software development experience",
        "software engineering",
        "programming language",
        "computer science degree",
        "cs degree",
        "full stack developer",
        "full-stack developer",
    ),
    "frontend": (
        "frontend developer",
        "front-end developer",
        "frontend engineer",
        "front-end engineer",
        "react developer",
        "angular developer",
        "vue developer",
        "javascript developer",
        "web developer",
    ),
    "backend": (
        "backend developer",
        "back-end developer",
        "backend engineer",
        "back-end engineer",
        "api development",
        "server-side",
        "microservices architecture",
    ),
    "design": (
        "ux designer",
        "ui designer",
        "ux design experience",
        "ui design experience",
        "user experience designer",
        "product designer",
        "design experience",
        "user research experience",
        "usability testing",
        "wireframes",
        "prototypes",
        "design portfolio",
        "design skills",
        "figma experience",
        "sketch experience",
    ),
    "marketing": (
        "marketing manager",
        "marketing experience",
        "marketing lead",
        "demand generation",
        "growth marketing",
        "b2b marketing",
        "marketing automation",
        "hubspot",
        "marketo",
        "mql",
        "marketing campaigns",
        "content marketing",
    ),
    "sales": (
        "sales experience",
        "sales manager",
        "sales team",
        "account executive",
        "enterprise sales",
        "quota attainment",
        "sales pipeline",
        "closed deals",
        "revenue targets",
        "b2b sales",
        "saas sales",
    ),
    "data": (
        "data scientist",
        "data analyst",
        "data engineer",
        "machine learning engineer",
        "data science experience",
        "statistical analysis",
    ),
    "finance": (
        "financial analyst",
        "financial modeling",
        "financial reporting",
        "fp&a",
        "accounts payable",
        "accounts receivable",
        "general ledger",
        "budget forecasting",
        "cpa certification",
    ),
    "operations": (
        "operations manager",
        "supply chain",
        "logistics coordination",
        "inventory management",
        "process improvement",
        "vendor management",
        "operational efficiency",
    ),
    "healthcare": (
        "patient care",
        "clinical experience",
        "registered nurse",
        "electronic health records",
        "hipaa compliance",
        "medical terminology",
    ),
    "hr": (
        "human resources",
        "talent acquisition",
        "employee relations",
        "hr business partner",
        "benefits administration",
        "performance management",
    ),
}

RELATED_DOMAINS: tuple[tuple[str, str], ...] = (
    ("software", "frontend"),
    ("software", "backend"),
    ("software", "data"),
    ("frontend", "design"),
    ("marketing", "sales"),
    ("finance", "operations"),
)

# Synonym groups allowed to add the bullet co-membership bonus.
TECHNICAL_SYNONYM_GROUPS: frozenset[str] = frozenset(
    {
        "react",
        "javascript",
        "typescript",
        "python",
        "sql",
        "aws",
        "cloud",
        "docker",
        "api",
        "database",
        "frontend",
        "backend",
        "nodejs",
        "machine learning",
        "data science",
    }
)

TECHNICAL_INDICATORS: tuple[str, ...] = (
    "software", "development", "engineering", "programming", "coding", "developer", "engineer",
    "technical", "computer science", "software development",
    "react", "angular", "vue", "javascript", "typescript", "python", "java", "node", "go", "rust",
    "sql", "database", "postgresql", "mysql", "mongodb", "redis", "api", "rest api", "graphql",
    "aws", "cloud", "azure", "gcp", "docker", "kubernetes", "devops", "ci/cd",
    "html", "css", "frontend", "backend", "fullstack", "microservices", "architecture",
    "machine learning", "data science", "tensorflow", "pytorch",
    "data structures", "algorithms", "testing", "jest", "state management", "redux",
    "figma", "sketch", "adobe", "user research", "wireframe", "prototype", "accessibility", "wcag",
    "ux", "ui design", "design system", "usability testing", "information architecture",
    "user-centered design", "design process", "design tools", "portfolio",
    "seo", "sem", "ppc", "google ads", "facebook ads", "hubspot", "marketo", "salesforce marketing",
    "content marketing", "demand generation", "abm", "marketing automation", "google analytics",
    "b2b marketing", "growth marketing", "mql", "marketing budget", "marketing experience",
    "salesforce", "crm", "enterprise sales", "quota", "pipeline", "revenue", "b2b sales", "saas sales",
    "sales operations", "account management", "strategic accounts", "channel partner",
    "sales experience", "sales team", "enterprise software sales", "fortune 500", "arr",
)

RAW_TEXT_TERMS: tuple[str, ...] = (
    "react", "angular", "vue", "javascript", "typescript", "python", "java", "node",
    "sql", "database", "api", "aws", "cloud", "docker", "kubernetes", "git",
    "html", "css", "frontend", "backend", "fullstack", "machine learning", "data science",
    "figma", "sketch", "user research", "wireframe", "prototype", "accessibility",
    "salesforce", "hubspot", "marketo", "seo", "sem", "ppc", "analytics",
    "saas", "b2b", "enterprise", "revenue", "pipeline", "quota",
)

STOPWORDS: frozenset[str] = frozenset(
    {
        "the", "and", "with", "for", "that", "this", "from", "have", "been", "were", "was",
        "are", "team", "work", "working", "using", "your", "will", "our", "you", "their",
        "into", "about", "across", "within", "ability", "strong", "plus",
    }
)

# Words that carry no skill signal on their own in token-overlap scoring.
GENERIC_WORDS: frozenset[str] = frozenset(
    {
        "experience", "experienced", "years", "year", "skills", "skill", "knowledge",
        "understanding", "proficiency", "proficient", "familiarity", "familiar", "excellent",
        "good", "solid", "proven", "demonstrated", "background", "required", "preferred",
        "must", "level", "including", "related", "similar", "other",
    }
)

SKILL_CATEGORIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("technical", ("programming", "development", "engineering", "software", "data", "cloud", "devops")),
    ("tool", ("excel", "jira", "git", "docker", "aws", "figma", "slack", "notion")),
    ("language", ("javascript", "python", "java", "typescript", "sql", "go", "rust", "c++")),
    ("soft", ("leadership", "communication", "teamwork", "problem-solving", "collaboration")),
)

ACTION_VERBS: frozenset[str] = frozenset(
    {
        "led", "developed", "implemented", "designed", "built", "created",
        "managed", "improved", "increased", "reduced", "launched", "delivered",
        "automated", "optimized", "architected", "mentored", "collaborated",
    }
)

JOB_TITLE_KEYWORDS: tuple[str, ...] = (
    "engineer", "developer", "manager", "analyst", "designer", "lead", "director",
    "specialist", "coordinator", "consultant", "architect", "executive", "scientist",
    "intern", "representative", "strategist", "vp", "president",
)

ROLE_GROUPS: tuple[tuple[str, ...], ...] = (
    ("engineer", "developer", "programmer", "architect"),
    ("manager", "director", "head of", "vp"),
    ("analyst", "specialist", "scientist"),
    ("designer",),
    ("marketing", "marketer"),
    ("sales", "account executive", "business development"),
)

DEGREE_LEVELS: tuple[tuple[int, tuple[str, ...]], ...] = (
    (1, ("bachelor", "b.s.", "b.a.", "b.sc", "bs in", "ba in", "bs degree", "ba degree", "undergraduate")),
    (2, ("master", "m.s.", "m.a.", "mba", "m.sc", "ms in", "ma in", "ms degree", "ma degree")),
    (3, ("phd", "ph.d.", "ph.d", "doctorate", "doctoral")),
)

STUDY_FIELDS: tuple[str, ...] = (
    "computer science", "engineering", "business", "marketing", "design", "mathematics",
    "physics", "information technology", "statistics", "finance", "economics",
)

EDUCATION_TERMS: tuple[str, ...] = (
    "degree", "bachelor", "master", "phd", "ph.d", "doctorate", "mba", "diploma", "b.s.", "b.a.", "m.s.",
    "bs in", "ba in", "ms in",
)
