# Demo records for local development. Some rows deliberately carry statuses
# written before the three-state model ("approved", "accepted", "refused").
CATEGORY_CATALOG = [
    {"name": "Cardiology", "description": "Heart and circulatory system"},
    {"name": "Oncology", "description": "Cancer research and treatment"},
    {"name": "Genetics", "description": "DNA, heredity and genomic medicine"},
]

CONTENT_CATALOG = [
    {
        "kind": "document",
        "title": "Statin therapy outcomes in older adults",
        "description": "Retrospective cohort on cardiovascular events.",
        "media_url": "https://example.org/uploads/statin-outcomes.pdf",
        "category": "Cardiology",
        "author": "dr.ramos",
        "journal": "Journal of Preventive Cardiology",
        "year": 2023,
        "status": "verified",
    },
    {
        "kind": "document",
        "title": "BRCA1 screening guidance",
        "description": "Summary of screening recommendations for carriers.",
        "media_url": "https://example.org/uploads/brca1-screening.pdf",
        "category": "Genetics",
        "author": "dr.keller",
        "journal": "Clinical Genetics Review",
        "year": 2021,
        "status": "accepted",
    },
    {
        "kind": "document",
        "title": "Immunotherapy response markers",
        "description": "Narrative review of predictive biomarkers.",
        "media_url": "https://example.org/uploads/immunotherapy-markers.pdf",
        "category": "Oncology",
        "author": "dr.okafor",
        "journal": "Oncology Letters",
        "year": 2022,
        "status": "pending",
    },
    {
        "kind": "document",
        "title": "Unreviewed supplement claims",
        "description": "Submission without supporting references.",
        "media_url": "https://example.org/uploads/supplement-claims.pdf",
        "category": "Cardiology",
        "author": "guest",
        "journal": None,
        "year": None,
        "status": "refused",
    },
    {
        "kind": "video",
        "title": "How the heart conducts electricity",
        "description": "Animated walkthrough of the cardiac conduction system.",
        "media_url": "https://example.org/videos/cardiac-conduction.mp4",
        "category": "Cardiology",
        "author": "dr.ramos",
        "journal": None,
        "year": None,
        "status": "approved",
    },
    {
        "kind": "video",
        "title": "Understanding tumour staging",
        "description": "Lecture recording on TNM staging.",
        "media_url": "https://example.org/videos/tumour-staging.mp4",
        "category": "Oncology",
        "author": "dr.okafor",
        "journal": None,
        "year": None,
        "status": "rejected",
    },
    {
        "kind": "video",
        "title": "Gene editing explained",
        "description": "Imported from the previous platform.",
        "media_url": "https://example.org/videos/gene-editing.mp4",
        "category": "Genetics",
        "author": "dr.keller",
        "journal": None,
        "year": None,
        "status": "archived",
    },
]
