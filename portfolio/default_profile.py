"""Document profil par défaut : servi au premier accès et en cas de panne DB."""
import copy

DEFAULT_PROFILE: dict = {
    "name": "Your Name",
    "headline": "Developer · Designer · Builder",
    "avatar": None,
    "about": "A short introduction about yourself.",
    "sections": [
        {
            "id": "experience",
            "title": "Experience",
            "enableGlassEffect": False,
            "blocks": [
                {"type": "title", "content": "Past Projects"},
                {"type": "context", "content": "Brief description of your project or role", "duration": "2023 - 2024"},
            ],
        },
        {
            "id": "education",
            "title": "Education",
            "enableGlassEffect": True,
            "blocks": [
                {"type": "title", "content": "Educational Attainment", "duration": "2019 - 2023"},
            ],
        },
    ],
}


def default_profile() -> dict:
    """Copie profonde : l'appelant peut muter sans toucher au défaut."""
    return copy.deepcopy(DEFAULT_PROFILE)
