"""
Static slot dictionaries.

Each category has a primary/synonym dictionary (exact terms -> "Clear") and
a loose phrase list (paraphrases -> "Adequate Clarity"). Declaration order
is the final tie-break when two terms match at the same position with the
same length, so keep the more specific canonical values first.
"""

from .categories import Category

INTENT_DICTIONARY = {
    "menu": {
        "primary": ["i would like to", "i want to", "i need to", "i wish to", "i intend to"],
        "synonyms": [],
    },
    "help": {
        "primary": [
            "how do i", "does the system support", "is there capability to", "where can i",
            "what's the best way to", "what's required to", "what's involved in",
            "could you show me", "can you guide me on", "can you explain how to",
        ],
        "synonyms": [],
    },
}

PROCESS_DICTIONARY = {
    "key result checkin": {"primary": ["key result checkin"], "synonyms": ["checkin"]},
    "key result": {"primary": ["key result"], "synonyms": ["kpi"]},
    "objective": {"primary": ["objective"], "synonyms": ["goal"]},
    "initiative": {"primary": ["initiative"], "synonyms": ["action item"]},
    "review meeting": {"primary": ["review meeting"], "synonyms": ["meeting"]},
}

ACTION_DICTIONARY = {
    "create": {
        "primary": ["create", "add"],
        "synonyms": ["enter", "input", "register", "insert", "submit", "append", "post", "start"],
    },
    "modify": {
        "primary": ["modify", "update"],
        "synonyms": ["edit", "revise", "alter", "amend", "adjust", "correct", "change", "fix", "refine"],
    },
    "search": {
        "primary": ["search for", "search"],
        "synonyms": [
            "find", "locate", "view", "browse", "display", "show", "list", "check", "inspect",
            "open", "access", "retrieve", "get", "load", "query", "fetch",
        ],
    },
    "delete": {
        "primary": ["delete record", "delete"],
        "synonyms": [
            "remove", "discard", "erase", "purge", "destroy", "eliminate", "clear", "drop",
            "cancel", "void", "revoke", "obliterate",
        ],
    },
}

FILTER_NAME_DICTIONARY = {
    "due": {"primary": ["due", "deadline"], "synonyms": ["due date"]},
    "priority": {"primary": ["priority"], "synonyms": ["importance"]},
    "status": {"primary": ["status"], "synonyms": ["state"]},
    "assigned": {"primary": ["assigned", "assigned to"], "synonyms": ["owner"]},
    "quarter": {"primary": ["quarter", "q"], "synonyms": []},
}

FILTER_OPERATOR_DICTIONARY = {
    "equal to": {"primary": ["=", "equals", "is"], "synonyms": ["equal to"]},
    "greater than": {"primary": [">", "greater than"], "synonyms": ["more than"]},
    "less than": {"primary": ["<", "less than"], "synonyms": ["below"]},
}

# Filter values are canonicalised per literal
FILTER_VALUE_DICTIONARY = {
    "today": {"primary": ["today"], "synonyms": []},
    "tomorrow": {"primary": ["tomorrow"], "synonyms": []},
    "yesterday": {"primary": ["yesterday"], "synonyms": []},
    "high": {"primary": ["high"], "synonyms": []},
    "medium": {"primary": ["medium"], "synonyms": []},
    "low": {"primary": ["low"], "synonyms": []},
    "pending": {"primary": ["pending"], "synonyms": []},
    "completed": {"primary": ["completed"], "synonyms": ["done"]},
    "q1": {"primary": ["q1", "quarter 1"], "synonyms": ["1"]},
    "q2": {"primary": ["q2", "quarter 2"], "synonyms": ["2"]},
    "q3": {"primary": ["q3", "quarter 3"], "synonyms": ["3"]},
    "q4": {"primary": ["q4", "quarter 4"], "synonyms": ["4"]},
}

INTENT_PHRASE_DICTIONARY = {
    "menu": [
        "i'm looking to", "i'm trying to", "i am preparing to", "i am planning to",
        "i am aiming to", "i am hoping to", "i feel ready to",
    ],
    "help": [
        "how to", "does it have", "show me how to", "what's the way to", "what steps do i take to",
        "how may i", "how can i", "could you explain how to", "can you help me",
        "i'm looking to understand how to",
    ],
}

PROCESS_PHRASE_DICTIONARY = {
    "objective": ["target to achieve", "plan for", "aim to complete"],
    "key result": ["performance metric", "result to track", "key performance indicator"],
    "initiative": ["project to start", "task to undertake", "action to take"],
    "review meeting": ["team meeting", "discussion session", "review session"],
    "key result checkin": ["progress check", "status update", "check-in meeting"],
}

ACTION_PHRASE_DICTIONARY = {
    "create": [
        "add a record", "enter a new record", "input new data", "make a new record", "make an entry",
        "open a new record", "save new record", "submit new record", "insert a record", "append a record",
    ],
    "modify": [
        "edit a record", "update a record", "change details", "revise record", "alter record",
        "amend details", "adjust details", "modify record", "correct record", "make changes",
        "make updates",
    ],
    "search": [
        "search records", "look up data", "find records", "view records", "open records",
        "show records", "show data", "display records", "browse records", "list records",
        "check records", "inspect records", "access records", "retrieve records", "pull records",
        "load records", "query records", "fetch records", "look for",
    ],
    "delete": [
        "delete entry", "remove record", "remove entry", "discard record", "discard entry",
        "erase record", "purge record", "purge entry", "clear entry", "drop entry", "cancel entry",
        "terminate entry", "void entry", "revoke entry", "get rid of",
    ],
}

FILTER_NAME_PHRASE_DICTIONARY = {
    "due": ["when it is due", "due by", "completion date"],
    "priority": ["level of urgency", "importance level", "priority of", "urgency"],
    "status": ["current state", "progress status", "condition of"],
    "assigned": ["who is responsible", "assigned person", "task owner"],
}

FILTER_OPERATOR_PHRASE_DICTIONARY = {
    "equal to": ["same as", "matches", "is exactly"],
    "greater than": ["exceeds", "higher than", "above"],
    "less than": ["under", "lower than", "lesser than"],
}

FILTER_VALUE_PHRASE_DICTIONARY = {
    "high": ["urgent", "critical"],
    "medium": ["normal"],
    "low": ["minor"],
    "pending": ["in progress", "open"],
    "completed": ["closed", "finished"],
}

# Surface intent phrases that may come back from the vector index
INTENT_PHRASE_TO_CATEGORY = {
    "i want to": "menu",
    "i need to": "menu",
    "i would like to": "menu",
    "i wish to": "menu",
    "i intend to": "menu",
    "how do i": "help",
    "how can i": "help",
    "show me how": "help",
    "can you guide me": "help",
    "what is the way to": "help",
}

# Help documentation per process, used by the help redirect
PROCESS_REFERENCE_DOCUMENTS = {
    "objective": "/docs/objective-help.html",
    "key result": "/docs/key-result-help.html",
    "initiative": "/docs/initiative-help.html",
    "review meeting": "/docs/review-meeting-help.html",
    "key result checkin": "/docs/key-result-checkin-help.html",
}

# Verbs that split an utterance into intent / action / process segments
ACTION_VERBS = [
    "create", "add", "generate",
    "modify", "update", "change",
    "search for", "search", "find", "locate",
    "delete", "remove", "erase",
]

# Keywords that introduce filter clauses after the process
FILTER_KEYWORDS = ["with", "where", "having", "for"]

# Leading words dropped from extracted process text
PROCESS_STOP_WORDS = ["a", "an", "the", "new", "my", "all"]

DICTIONARIES = {
    Category.INTENT: INTENT_DICTIONARY,
    Category.PROCESS: PROCESS_DICTIONARY,
    Category.ACTION: ACTION_DICTIONARY,
    Category.FILTER_NAME: FILTER_NAME_DICTIONARY,
    Category.FILTER_OPERATOR: FILTER_OPERATOR_DICTIONARY,
    Category.FILTER_VALUE: FILTER_VALUE_DICTIONARY,
}

PHRASE_DICTIONARIES = {
    Category.INTENT: INTENT_PHRASE_DICTIONARY,
    Category.PROCESS: PROCESS_PHRASE_DICTIONARY,
    Category.ACTION: ACTION_PHRASE_DICTIONARY,
    Category.FILTER_NAME: FILTER_NAME_PHRASE_DICTIONARY,
    Category.FILTER_OPERATOR: FILTER_OPERATOR_PHRASE_DICTIONARY,
    Category.FILTER_VALUE: FILTER_VALUE_PHRASE_DICTIONARY,
}
