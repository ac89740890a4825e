from typing import Dict, List, Literal, NamedTuple, get_args

from .errors import InvalidType

CognitiveFunction = Literal["Se", "Si", "Ne", "Ni", "Te", "Ti", "Fe", "Fi"]
PersonalityType = Literal[
    "INTJ", "INTP", "ENTJ", "ENTP",
    "INFJ", "INFP", "ENFJ", "ENFP",
    "ISTJ", "ISFJ", "ESTJ", "ESFJ",
    "ISTP", "ISFP", "ESTP", "ESFP",
]

ALL_TYPES: List[str] = list(get_args(PersonalityType))


class FunctionStack(NamedTuple):
    dominant: str
    auxiliary: str
    tertiary: str
    inferior: str


FUNCTION_STACKS: Dict[str, FunctionStack] = {
    "INTJ": FunctionStack("Ni", "Te", "Fi", "Se"),
    "INTP": FunctionStack("Ti", "Ne", "Si", "Fe"),
    "ENTJ": FunctionStack("Te", "Ni", "Se", "Fi"),
    "ENTP": FunctionStack("Ne", "Ti", "Fe", "Si"),
    "INFJ": FunctionStack("Ni", "Fe", "Ti", "Se"),
    "INFP": FunctionStack("Fi", "Ne", "Si", "Te"),
    "ENFJ": FunctionStack("Fe", "Ni", "Se", "Ti"),
    "ENFP": FunctionStack("Ne", "Fi", "Te", "Si"),
    "ISTJ": FunctionStack("Si", "Te", "Fi", "Ne"),
    "ISFJ": FunctionStack("Si", "Fe", "Ti", "Ne"),
    "ESTJ": FunctionStack("Te", "Si", "Ne", "Fi"),
    "ESFJ": FunctionStack("Fe", "Si", "Ne", "Ti"),
    "ISTP": FunctionStack("Ti", "Se", "Ni", "Fe"),
    "ISFP": FunctionStack("Fi", "Se", "Ni", "Te"),
    "ESTP": FunctionStack("Se", "Ti", "Fe", "Ni"),
    "ESFP": FunctionStack("Se", "Fi", "Te", "Ni"),
}

FUNCTION_DESCRIPTIONS: Dict[str, Dict[str, str]] = {
    "Se": {
        "name": "Extraverted Sensing",
        "description": "Perceiving the present moment through the senses, bodily experience and aesthetics",
        "manifestation": "Trouble staying grounded in the body, ignoring physical needs, little attention to surroundings",
        "growth_path": "Build bodily awareness, presence in the moment and sensory appreciation of the world",
    },
    "Si": {
        "name": "Introverted Sensing",
        "description": "Inner bodily sensations, memory of past experience, tradition",
        "manifestation": "Ignoring body signals, disregard for what worked before, difficulty keeping routines",
        "growth_path": "Attend to the body, respect past experience and create helpful rituals",
    },
    "Ne": {
        "name": "Extraverted Intuition",
        "description": "Seeing many possibilities, patterns and connections in the outer world",
        "manifestation": "Rigid thinking, fear of the unknown, resistance to anything new",
        "growth_path": "Develop flexible thinking, openness to experience and an eye for alternatives",
    },
    "Ni": {
        "name": "Introverted Intuition",
        "description": "Inner insight, deep patterns and long-range perspective",
        "manifestation": "No long-term vision, impulsiveness, living only in the present",
        "growth_path": "Develop reflection, foresight and a deeper understanding of where things lead",
    },
    "Te": {
        "name": "Extraverted Thinking",
        "description": "Logical organization of the outer world, efficiency and structure",
        "manifestation": "Disorganization, avoiding planning, trouble setting clear goals",
        "growth_path": "Practice planning, organizing and applying ideas in concrete ways",
    },
    "Ti": {
        "name": "Introverted Thinking",
        "description": "Inner logical consistency, analysis and understanding of principles",
        "manifestation": "Inconsistent reasoning, emotional argument in place of logic",
        "growth_path": "Develop logical analysis and an internally consistent framework",
    },
    "Fe": {
        "name": "Extraverted Feeling",
        "description": "Harmony in relationships, empathy, social norms and care for others",
        "manifestation": "Social awkwardness, overlooking how others feel, conflict",
        "growth_path": "Grow empathy, communication skills and the ability to create harmony",
    },
    "Fi": {
        "name": "Introverted Feeling",
        "description": "Inner values, authenticity, personal ethics and depth of feeling",
        "manifestation": "Losing touch with one's own feelings, overriding personal values",
        "growth_path": "Develop emotional awareness, contact with values and authenticity",
    },
}


def normalize_type(value: object) -> str:
    code = str(value).strip().upper() if isinstance(value, str) else ""
    if code not in FUNCTION_STACKS:
        raise InvalidType(value)
    return code


def resolve_stack(personality_type: str) -> FunctionStack:
    return FUNCTION_STACKS[normalize_type(personality_type)]


def resolve_inferior(personality_type: str) -> str:
    return resolve_stack(personality_type).inferior


def resolve_dominant(personality_type: str) -> str:
    return resolve_stack(personality_type).dominant


def types_with_inferior(function: str) -> List[str]:
    return [code for code, stack in FUNCTION_STACKS.items() if stack.inferior == function]


def function_name(function: str) -> str:
    description = FUNCTION_DESCRIPTIONS.get(function)
    return description["name"] if description else function
