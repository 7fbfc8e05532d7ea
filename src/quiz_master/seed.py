"""Built-in questions used when nothing has been saved yet."""

from .models import Question

SEED_QUESTIONS = [
    Question("General Knowledge", "What is the capital of Cambodia?",
             ["Siem Reap", "Phnom Penh", "Battambang", "Kampot"], 1),
    Question("General Knowledge", "Which temple complex appears on the Cambodian flag?",
             ["Bayon", "Ta Prohm", "Angkor Wat", "Preah Vihear"], 2),
    Question("General Knowledge", "Which river flows through Phnom Penh?",
             ["Mekong", "Nile", "Chao Phraya", "Irrawaddy"], 0),
    Question("Mathematics", "What is 7 x 8?",
             ["54", "56", "58", "64"], 1),
    Question("Mathematics", "What is the square root of 81?",
             ["7", "8", "9", "11"], 2),
    Question("Mathematics", "How many degrees are in a right angle?",
             ["45", "90", "180", "360"], 1),
]
