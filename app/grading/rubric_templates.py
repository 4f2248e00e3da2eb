"""Built-in rubric definitions shipped with the gradebook.

Each entry is rubric JSON data in the same shape accepted by
``grading.rubric.load_rubric``. Levels use the standard four-tier
percentages, so they carry no explicit ``percentage``.
"""


def _criterion(name: str, *descriptions: str) -> dict:
    return {
        "name": name,
        "levels": [
            {"level": i, "description": text} for i, text in enumerate(descriptions, start=1)
        ],
    }


BUILTIN_RUBRICS = [
    {
        "id": "jk_writing",
        "title": "JK Writing Skills",
        "description": "Early writing and mark-making skills for Junior Kindergarten",
        "applicable_grades": [0],
        "criteria": [
            _criterion(
                "Mark Making",
                "Makes random marks on paper",
                "Makes controlled marks and basic shapes",
                "Creates recognizable shapes and letters",
                "Forms clear letters and shapes with good control",
            ),
            _criterion(
                "Name Writing",
                "Attempts to write name with support",
                "Writes some letters of name independently",
                "Writes full name with few errors",
                "Writes name clearly and consistently",
            ),
        ],
    },
    {
        "id": "grade3_math",
        "title": "Grade 3 Math Problem Solving",
        "description": "Mathematical problem-solving skills for Grade 3",
        "applicable_grades": [3],
        "criteria": [
            _criterion(
                "Understanding",
                "Shows limited understanding of the problem",
                "Shows some understanding of the problem",
                "Shows good understanding of the problem",
                "Shows thorough understanding of the problem",
            ),
            _criterion(
                "Strategy & Procedures",
                "Uses limited or inappropriate strategies",
                "Uses some appropriate strategies",
                "Uses appropriate and effective strategies",
                "Uses innovative and highly effective strategies",
            ),
            _criterion(
                "Communication",
                "Explains thinking with limited clarity",
                "Explains thinking with some clarity",
                "Explains thinking clearly and completely",
                "Explains thinking with exceptional clarity and detail",
            ),
        ],
    },
    {
        "id": "grade5_writing",
        "title": "Grade 5 Writing Assessment",
        "description": "Organization, ideas and conventions in Grade 5 writing",
        "applicable_grades": [5],
        "criteria": [
            _criterion(
                "Ideas & Content",
                "Basic ideas with limited development",
                "Ideas are generally focused with some development",
                "Clear, developed ideas with supporting details",
                "Rich, detailed ideas with thorough development",
            ),
            _criterion(
                "Organization",
                "Limited organization and structure",
                "Basic organization with some transitions",
                "Clear organization with effective transitions",
                "Sophisticated organization enhancing clarity",
            ),
            _criterion(
                "Language & Style",
                "Simple language with limited variety",
                "Some variety in language and sentence structure",
                "Effective language and varied sentence structure",
                "Rich language with sophisticated style",
            ),
        ],
    },
    {
        "id": "grade7_science",
        "title": "Grade 7 Science Inquiry Skills",
        "description": "Scientific inquiry and communication for Grade 7",
        "applicable_grades": [7],
        "criteria": [
            _criterion(
                "Questioning & Predicting",
                "Rarely asks questions or makes predictions",
                "Sometimes asks relevant questions or makes predictions",
                "Often asks thoughtful questions and makes logical predictions",
                "Consistently asks insightful questions and makes well-reasoned predictions",
            ),
            _criterion(
                "Planning & Conducting",
                "Needs support to plan and conduct investigations",
                "Plans and conducts simple investigations with some support",
                "Independently plans and conducts effective investigations",
                "Designs and conducts complex investigations with precision",
            ),
            _criterion(
                "Communicating Results",
                "Communicates results with limited clarity",
                "Communicates results with some clarity and detail",
                "Clearly communicates results with appropriate detail",
                "Communicates results with exceptional clarity and insight",
            ),
        ],
    },
    {
        "id": "grade10_english",
        "title": "Grade 10 English Literary Analysis",
        "description": "Literary analysis and writing skills for Grade 10",
        "applicable_grades": [10],
        "criteria": [
            _criterion(
                "Thesis & Argument",
                "Thesis is unclear or missing; argument is weak",
                "Thesis is present but basic; argument is somewhat developed",
                "Clear thesis and well-developed argument",
                "Insightful thesis and sophisticated, compelling argument",
            ),
            _criterion(
                "Evidence & Support",
                "Little or no evidence provided",
                "Some evidence provided, but not always relevant or explained",
                "Relevant evidence is provided and explained",
                "Extensive, well-chosen evidence with insightful explanation",
            ),
            _criterion(
                "Organization & Style",
                "Disorganized and unclear writing style",
                "Some organization; writing style is basic",
                "Well-organized and clear writing style",
                "Exceptionally organized and engaging writing style",
            ),
        ],
    },
]
