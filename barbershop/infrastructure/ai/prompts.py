from barbershop.domain.entities.style import FaceAnalysis, Preferences

FACE_SHAPES = ("Oval", "Round", "Square", "Heart", "Diamond", "Oblong")


def build_analyze_prompt() -> str:
    return (
        "Analyze the person in this image.\n"
        "Return ONLY valid JSON. No markdown. No extra text.\n"
        "Output schema:\n"
        "  {\"faceShape\": \"...\", \"features\": [\"...\", ...]}\n"
        "Rules:\n"
        f"  - faceShape is one of: {', '.join(FACE_SHAPES)}.\n"
        "  - features lists prominent facial traits such as beard, mustache or glasses.\n"
    )


def build_recommendations_prompt(analysis: FaceAnalysis, preferences: Preferences, count: int = 4) -> str:
    lines = [
        "You are an expert barber.",
        "Return ONLY valid JSON. No markdown. No extra text.",
        "Output schema:",
        "  {\"recommendations\": [{\"name\": \"...\", \"description\": \"...\"}, ...]}",
        f"Recommend exactly {count} haircut styles for a '{analysis.face_shape}' face shape"
        f" with features [{', '.join(analysis.features)}].",
    ]
    if preferences.length != "any":
        lines.append(f"The client prefers {preferences.length} hair.")
    if preferences.style != "any":
        lines.append(f"The client likes a {preferences.style} style.")
    lines.append("Each description is one or two short sentences.")
    return "\n".join(lines) + "\n"


def build_example_image_prompt(name: str, face_shape: str) -> str:
    return (
        f"A high quality photorealistic portrait of a man with a '{face_shape}' face shape "
        f"and a '{name}' haircut. Modern barbershop setting, clean background."
    )


def build_simulation_prompt(name: str) -> str:
    return (
        "You are an expert hairstyle image editor.\n"
        f"Edit the photo so the person's haircut matches the style '{name}'.\n"
        "Rules:\n"
        "1. Keep the original facial features, expression and skin tone.\n"
        "2. Do not change the background.\n"
        "3. The result must be photorealistic.\n"
    )
