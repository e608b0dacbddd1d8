# pteprep/data/questions.py
"""Built-in practice items, at least one per question type."""
from __future__ import annotations

from typing import Dict, List, Optional

from pteprep.core.question_types import QuestionType, Section
from pteprep.models.schemas import Question

_RAW: List[dict] = [
    # ---------------- Speaking ----------------
    {
        "id": "ra-1",
        "type": "read-aloud",
        "title": "Read Aloud",
        "instruction": "Read the text aloud as naturally as possible. You have 30 seconds to prepare.",
        "prep_time": 30,
        "response_time": 40,
        "text": (
            "The proliferation of digital technologies has fundamentally altered the landscape of modern "
            "education. Online learning platforms now offer unprecedented access to knowledge, enabling "
            "students from remote areas to participate in courses previously available only to urban populations."
        ),
    },
    {
        "id": "ra-2",
        "type": "read-aloud",
        "title": "Read Aloud",
        "instruction": "Read the text aloud as naturally as possible. You have 30 seconds to prepare.",
        "difficulty": "hard",
        "prep_time": 30,
        "response_time": 40,
        "text": (
            "Contemporary architectural practices increasingly incorporate sustainable design principles, "
            "recognizing the imperative to minimize environmental impact while maximizing occupant comfort."
        ),
    },
    {
        "id": "rs-1",
        "type": "repeat-sentence",
        "title": "Repeat Sentence",
        "instruction": "Listen to the sentence and repeat it exactly as you heard it.",
        "prep_time": 3,
        "response_time": 15,
        "text": "The university has announced a new scholarship program for international students starting next semester.",
    },
    {
        "id": "di-1",
        "type": "describe-image",
        "title": "Describe Image",
        "instruction": "Describe the image in detail. You have 25 seconds to study the image and 40 seconds to speak.",
        "prep_time": 25,
        "response_time": 40,
        "image_description": (
            "A stacked bar chart comparing smartphone market share across brands (Apple, Samsung, Xiaomi, "
            "Others) from 2019 to 2023, showing Samsung and Apple dominating with roughly equal shares."
        ),
    },
    {
        "id": "rl-1",
        "type": "retell-lecture",
        "title": "Re-tell Lecture",
        "instruction": "Listen to the lecture and re-tell it in your own words.",
        "prep_time": 10,
        "response_time": 40,
        "audio_script": (
            "Today I want to discuss urbanization and its impact on traditional communities. As cities expand, "
            "rural populations migrate seeking employment and education. Urban areas offer better healthcare and "
            "diverse jobs, but traditional customs and community bonds often weaken as families disperse."
        ),
    },
    {
        "id": "asq-1",
        "type": "answer-short-question",
        "title": "Answer Short Question",
        "instruction": "Listen to the question and give a short answer.",
        "difficulty": "easy",
        "prep_time": 3,
        "response_time": 10,
        "question": "What instrument is used to measure temperature?",
        "correct_answers": ["thermometer"],
    },
    {
        "id": "sgd-1",
        "type": "summarise-group-discussion",
        "title": "Summarise Group Discussion",
        "instruction": "Listen to the discussion and summarise the main points made by each speaker.",
        "difficulty": "hard",
        "prep_time": 10,
        "response_time": 120,
        "discussion": [
            {"name": "Anna", "text": "Remote work has improved my productivity because I avoid the daily commute."},
            {"name": "Ben", "text": "I find it isolating; spontaneous conversations with colleagues are gone."},
            {"name": "Chloe", "text": "A hybrid schedule could keep the flexibility while preserving team contact."},
        ],
    },
    {
        "id": "rts-1",
        "type": "respond-to-situation",
        "title": "Respond to a Situation",
        "instruction": "Read the situation and respond as you would in real life.",
        "prep_time": 10,
        "response_time": 40,
        "context": (
            "You borrowed a classmate's textbook and accidentally spilled coffee on it. "
            "Explain what happened and offer to make it right."
        ),
    },
    # ---------------- Writing ----------------
    {
        "id": "swt-1",
        "type": "summarize-written-text",
        "title": "Summarize Written Text",
        "instruction": "Read the passage and summarize it in ONE sentence (5-75 words).",
        "response_time": 600,
        "text": (
            "The global economy is experiencing a significant transformation as emerging markets become "
            "increasingly influential. Countries such as China, India, and Brazil have seen remarkable growth, "
            "shifting the balance of global trade. This has created new opportunities for international business "
            "but also challenges for traditional economic powers."
        ),
    },
    {
        "id": "we-1",
        "type": "write-essay",
        "title": "Write Essay",
        "instruction": "Write an essay of 200-300 words on the given topic.",
        "response_time": 1200,
        "question": (
            "Some employers believe that formal academic qualifications are more important than life experience "
            "or personal qualities when selecting candidates. To what extent do you agree with this view?"
        ),
    },
    # ---------------- Reading ----------------
    {
        "id": "mcs-1",
        "type": "mc-single",
        "title": "Global Trade Impact",
        "instruction": "Read the passage and select the best answer.",
        "response_time": 120,
        "text": (
            "Global trade patterns have shifted with the rise of Asian economies. Some countries have invested "
            "heavily in education and retraining programs; others have pursued protectionist policies."
        ),
        "question": "According to the passage, what has been one response to changes in global trade patterns?",
        "options": [
            {"id": "a", "text": "Increasing manufacturing output"},
            {"id": "b", "text": "Investment in education and retraining programs"},
            {"id": "c", "text": "Reducing exports to Asian countries"},
            {"id": "d", "text": "Eliminating all trade agreements"},
        ],
        "correct_answers": ["b"],
    },
    {
        "id": "mcm-1",
        "type": "mc-multiple",
        "title": "Telemedicine",
        "instruction": "Read the passage and select ALL the correct answers. More than one response is correct.",
        "response_time": 150,
        "text": (
            "Telemedicine allows patients to receive advice without visiting a clinic, reducing travel time. "
            "Yet not all conditions can be assessed remotely, and access to the technology is not universal."
        ),
        "question": "Which statements are supported by the passage?",
        "options": [
            {"id": "a", "text": "Remote consultations reduce travel time"},
            {"id": "b", "text": "Telemedicine has replaced physical examinations"},
            {"id": "c", "text": "Unequal access to technology is a concern"},
            {"id": "d", "text": "Video equipment is too expensive for clinics"},
        ],
        "correct_answers": ["a", "c"],
    },
    {
        "id": "rop-1",
        "type": "reorder-paragraphs",
        "title": "Economic Development",
        "instruction": "Restore the original order of the text boxes.",
        "difficulty": "hard",
        "response_time": 180,
        "items": [
            {"id": "p1", "text": "Economic development transforms a society's productive capacity and standard of living."},
            {"id": "p2", "text": "Initially, most developing economies rely on agriculture and natural resources."},
            {"id": "p3", "text": "As development progresses, manufacturing sectors typically expand."},
            {"id": "p4", "text": "Eventually, service industries come to dominate the economy."},
            {"id": "p5", "text": "Throughout, education and infrastructure are essential to sustain growth."},
        ],
        "correct_order": ["p1", "p2", "p3", "p4", "p5"],
    },
    {
        "id": "fbd-1",
        "type": "fill-blanks-dropdown",
        "title": "Ocean Currents",
        "instruction": "Select the appropriate answer for each blank.",
        "response_time": 180,
        "text": (
            "Ocean currents [BLANK1] heat around the globe. Warm water from the equator [BLANK2] toward the poles, "
            "while cold water [BLANK3] back. This circulation [BLANK4] regional climates and [BLANK5] marine life."
        ),
        "blanks": [
            {"id": "b1", "correct_answer": "distribute", "options": ["distribute", "destroy", "ignore", "freeze"]},
            {"id": "b2", "correct_answer": "flows", "options": ["flows", "sleeps", "burns", "speaks"]},
            {"id": "b3", "correct_answer": "returns", "options": ["returns", "vanishes", "explodes", "sings"]},
            {"id": "b4", "correct_answer": "shapes", "options": ["shapes", "reads", "writes", "forgets"]},
            {"id": "b5", "correct_answer": "supports", "options": ["supports", "deletes", "paints", "counts"]},
        ],
    },
    {
        "id": "fbg-1",
        "type": "fill-blanks-drag",
        "title": "Climate Science",
        "instruction": "Drag words from the box below to fill in the blanks.",
        "response_time": 180,
        "text": (
            "Climate scientists use computer [BLANK1] to predict weather patterns. These tools process vast "
            "amounts of [BLANK2]. Accuracy has improved [BLANK3], and progress requires [BLANK4] in "
            "[BLANK5] research."
        ),
        "blanks": [
            {"id": "b1", "correct_answer": "models", "options": ["models", "toys", "books", "chairs"]},
            {"id": "b2", "correct_answer": "data", "options": ["data", "rumors", "opinions", "stories"]},
            {"id": "b3", "correct_answer": "significantly", "options": ["significantly", "rarely", "never"]},
            {"id": "b4", "correct_answer": "collaboration", "options": ["collaboration", "competition", "isolation"]},
            {"id": "b5", "correct_answer": "interdisciplinary", "options": ["interdisciplinary", "simple", "outdated"]},
        ],
    },
    # ---------------- Listening ----------------
    {
        "id": "sst-1",
        "type": "summarize-spoken-text",
        "title": "Urban Development",
        "instruction": "Write a summary of the lecture for a fellow student. You should write 50-70 words.",
        "difficulty": "hard",
        "response_time": 600,
        "audio_script": (
            "Urban planning faces unprecedented challenges as cities grow rapidly. Planners adopt mixed-use "
            "development, public transportation and green infrastructure, while smart city sensors improve "
            "resource allocation. Success depends on balancing growth with sustainability and social equity."
        ),
    },
    {
        "id": "mcsl-1",
        "type": "mc-single-listening",
        "title": "University Research",
        "instruction": "Listen to the recording and select the best response.",
        "response_time": 120,
        "audio_script": (
            "Universities increasingly rely on industry partnerships and private donations for research. "
            "Critics worry that private funding may steer priorities toward commercially viable projects."
        ),
        "question": "According to the speaker, what is a concern about relying on private research funding?",
        "options": [
            {"id": "a", "text": "It may reduce the quality of research"},
            {"id": "b", "text": "It could influence research priorities toward commercial interests"},
            {"id": "c", "text": "Private donors are unreliable"},
            {"id": "d", "text": "It increases competition among researchers"},
        ],
        "correct_answers": ["b"],
    },
    {
        "id": "mcml-1",
        "type": "mc-multiple-listening",
        "title": "Sleep and Memory",
        "instruction": "Listen to the recording and select ALL the correct answers.",
        "response_time": 150,
        "audio_script": (
            "Sleep plays a central role in consolidating memories. Deep sleep stabilizes facts learned during the "
            "day, and students who sleep after studying recall more than those who stay awake."
        ),
        "question": "Which points does the speaker make?",
        "options": [
            {"id": "a", "text": "Deep sleep helps stabilize learned facts"},
            {"id": "b", "text": "Sleep has no effect on learning"},
            {"id": "c", "text": "Sleeping after study improves recall"},
            {"id": "d", "text": "Students should study all night"},
        ],
        "correct_answers": ["a", "c"],
    },
    {
        "id": "fbl-1",
        "type": "fill-blanks-listening",
        "title": "Environmental Science",
        "instruction": "Type the missing words in the blanks. Write only one word in each blank.",
        "response_time": 180,
        "audio_script": (
            "Ocean acidification is a consequence of carbon dioxide emissions. Chemical reactions lower the "
            "water's pH, threatening organisms that build shells from calcium carbonate. Coral reefs are "
            "especially vulnerable, raising concerns about marine biodiversity."
        ),
        "text": (
            "Ocean [BLANK1] is a consequence of carbon dioxide emissions. Chemical [BLANK2] lower the water's pH, "
            "threatening organisms that build shells from calcium [BLANK3]. Coral reefs are especially [BLANK4], "
            "raising concerns about marine [BLANK5]."
        ),
        "blanks": [
            {"id": "b1", "correct_answer": "acidification"},
            {"id": "b2", "correct_answer": "reactions"},
            {"id": "b3", "correct_answer": "carbonate"},
            {"id": "b4", "correct_answer": "vulnerable"},
            {"id": "b5", "correct_answer": "biodiversity"},
        ],
    },
    {
        "id": "hcs-1",
        "type": "highlight-correct-summary",
        "title": "Digital Transformation",
        "instruction": "Click on the paragraph that best relates to the recording.",
        "response_time": 180,
        "audio_script": (
            "Companies across industries adopt cloud computing and automation to improve efficiency. Small "
            "businesses can now compete with larger ones, but workers must continuously update their skills."
        ),
        "options": [
            {"id": "a", "text": "Digital transformation is slowing down because technology is too expensive."},
            {"id": "b", "text": "Businesses embrace digital tools for efficiency, which helps small firms but requires workers to adapt."},
            {"id": "c", "text": "Only large corporations can afford digital transformation."},
            {"id": "d", "text": "Automation has replaced human workers in most industries."},
        ],
        "correct_answers": ["b"],
    },
    {
        "id": "smw-1",
        "type": "select-missing-word",
        "title": "Select Missing Word",
        "instruction": "Select the option that best completes the recording.",
        "response_time": 60,
        "audio_script": "Regular exercise strengthens the heart, improves mood and, over time, helps people live ...",
        "options": [
            {"id": "a", "text": "longer lives"},
            {"id": "b", "text": "in the city"},
            {"id": "c", "text": "without friends"},
        ],
        "correct_answers": ["a"],
    },
    {
        "id": "hiw-1",
        "type": "highlight-incorrect-words",
        "title": "Highlight Incorrect Words",
        "instruction": "Select the words in the transcript that differ from what the speaker says.",
        "response_time": 120,
        "audio_script": "The museum opens at nine and closes early on public holidays during the winter months.",
        "text": "The museum opens at ten and closes late on public holidays during the summer months.",
        "options": [
            {"id": "w5", "text": "ten"},
            {"id": "w8", "text": "late"},
            {"id": "w14", "text": "summer"},
        ],
        "correct_answers": ["w5", "w8", "w14"],
    },
    {
        "id": "wfd-1",
        "type": "write-from-dictation",
        "title": "Write from Dictation",
        "instruction": "Type the sentence exactly as you hear it.",
        "response_time": 60,
        "audio_script": "The laboratory equipment must be calibrated before each experimental procedure begins.",
    },
]

QUESTIONS: Dict[str, Question] = {}
for _raw in _RAW:
    _q = Question.model_validate(_raw)
    if _q.id in QUESTIONS:
        raise RuntimeError(f"duplicate question id {_q.id}")
    QUESTIONS[_q.id] = _q


def all_questions(
    question_type: Optional[QuestionType] = None,
    section: Optional[Section] = None,
) -> List[Question]:
    out = list(QUESTIONS.values())
    if question_type is not None:
        out = [q for q in out if q.type is question_type]
    if section is not None:
        out = [q for q in out if q.section is section]
    return out


def get_question(question_id: str) -> Optional[Question]:
    return QUESTIONS.get(question_id)


def questions_by_section() -> Dict[str, List[Question]]:
    grouped: Dict[str, List[Question]] = {s.value: [] for s in Section}
    for q in QUESTIONS.values():
        grouped[q.section.value].append(q)
    return grouped
