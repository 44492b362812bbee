# data/canned.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class EmergencyCategory(str, Enum):
    FIRE = "FIRE"
    GAS = "GAS"
    THEFT = "THEFT"
    MEDICAL = "MEDICAL"

    @classmethod
    def parse(cls, label: str) -> "EmergencyCategory":
        """Case-insensitive lookup, so "Fire" and "fire" both resolve to FIRE."""
        try:
            return cls[(label or "").strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown emergency category: {label!r}") from None


@dataclass(frozen=True)
class CannedQA:
    question: str
    answer: str


# number of shortcut buttons shown for the selected category
SHORTCUT_LIMIT = 5


CANNED_QA: Dict[EmergencyCategory, Tuple[CannedQA, ...]] = {
    EmergencyCategory.FIRE: (
        CannedQA("What should I do in case of a fire?", "Evacuate immediately and call emergency services at 101."),
        CannedQA("How can I prevent fires at home?", "Ensure electrical wiring is up to code and never leave stoves unattended."),
        CannedQA("What should I do if my clothes catch fire?", "Stop, drop, and roll to smother the flames."),
        CannedQA("How do I use a fire extinguisher?", "Remember PASS: Pull the pin, Aim at the base, Squeeze the handle, and Sweep side to side."),
        CannedQA("What should I do if I'm trapped in a burning building?", "Stay low to avoid smoke, find a safe exit, and signal for help from a window."),
        CannedQA("Can I use water on an electrical fire?", "No, use a Class C fire extinguisher instead."),
        CannedQA("How often should I check my smoke alarms?", "At least once a month."),
    ),
    EmergencyCategory.GAS: (
        CannedQA("How do I report a gas leak?", "Leave the area and call emergency services at 1906."),
        CannedQA("What are the signs of a gas leak?", "A strong sulfur smell, hissing sounds, or dizziness indoors."),
        CannedQA("What should I do if I smell gas in my house?", "Turn off the gas supply, avoid using electrical switches, and ventilate the area."),
        CannedQA("How can I prevent gas leaks?", "Regularly check gas connections and install a gas leak detector."),
        CannedQA("What are the health risks of gas leaks?", "Headaches, dizziness, nausea, and even unconsciousness in severe cases."),
        CannedQA("Should I use my phone if I suspect a gas leak?", "No, using electrical devices can ignite the gas."),
        CannedQA("How often should I inspect gas lines?", "At least once a year by a professional."),
    ),
    EmergencyCategory.THEFT: (
        CannedQA("What should I do right after a theft?", "Get to a safe location first, then call the police immediately."),
        CannedQA("Should I confront the thief?", "No. Do not confront the perpetrator; your safety comes first."),
        CannedQA("What information should I give the police?", "Document everything you can remember: descriptions, times, direction of travel and what was taken."),
        CannedQA("How do I secure my home after a break-in?", "Lock all doors and windows if safe to do so and avoid touching anything the intruder handled."),
        CannedQA("What if my cards or phone were stolen?", "Call your bank to block cards and ask your carrier to suspend the SIM."),
    ),
    EmergencyCategory.MEDICAL: (
        CannedQA("What number do I call for medical emergencies?", "Dial 108 for an ambulance."),
        CannedQA("How do I perform CPR?", "Check responsiveness, call for help, and give chest compressions."),
        CannedQA("What should I do if someone is choking?", "Perform the Heimlich maneuver by applying abdominal thrusts."),
        CannedQA("How do I treat a deep cut or wound?", "Apply pressure to stop bleeding, clean the wound, and cover it with a sterile bandage."),
        CannedQA("What are the symptoms of a stroke?", "Face drooping, arm weakness, and slurred speech."),
        CannedQA("How do I identify a heart attack?", "Chest pain, shortness of breath, and nausea."),
        CannedQA("What is the best way to treat burns?", "Cool the burn with running water and cover it with a sterile dressing."),
    ),
}


SAFETY_TIPS: Dict[EmergencyCategory, Tuple[str, ...]] = {
    EmergencyCategory.FIRE: (
        "Evacuate the building immediately!",
        "Call emergency services (911/112) right away",
        "Do not use elevators during a fire emergency",
        "Stay low to avoid smoke inhalation",
        "Meet at your designated assembly point",
    ),
    EmergencyCategory.GAS: (
        "Evacuate the area immediately",
        "Do not turn on/off any electrical switches",
        "Do not use your phone while inside the building",
        "Call emergency services from a safe distance",
        "Do not attempt to locate the leak yourself",
    ),
    EmergencyCategory.THEFT: (
        "Ensure you're in a safe location",
        "Call the police immediately",
        "Do not confront the perpetrator",
        "Document everything you can remember",
        "Lock all doors and windows if safe to do so",
    ),
    EmergencyCategory.MEDICAL: (
        "Call emergency medical services immediately",
        "Stay with the patient if safe to do so",
        "Check for breathing and consciousness",
        "Follow dispatcher instructions",
        "Have someone meet emergency responders",
    ),
}


def canned_questions(category: EmergencyCategory, limit: int = SHORTCUT_LIMIT) -> Tuple[CannedQA, ...]:
    return CANNED_QA[category][:limit]
