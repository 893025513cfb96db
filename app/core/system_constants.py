"""
System Constants

Defines system-wide constants used throughout the application.
"""

# Embedding storage (all-MiniLM-L6-v2 produces 384-dimensional vectors)
DEFAULT_EMBEDDING_DIMENSION = 384
JOB_EMBEDDING_INDEX_NAME = "ix_jobs_embedding_hnsw"

# Supported CV media types mapped to document kinds
CV_MEDIA_TYPES = {
    "application/pdf": "pdf",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
    "application/msword": "doc",
}

# Fixed vocabulary used to tag profiles with skills
SKILL_VOCABULARY = (
    "JavaScript", "Python", "Java", "React", "Node", "SQL", "MongoDB", "AWS", "Git",
    "Communication", "Leadership", "Management", "Analytics", "Excel", "Marketing",
    "Sales", "Design", "UX", "UI", "Testing", "Agile", "Scrum", "French", "English", "Arabic",
)
