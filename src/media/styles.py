"""
Visual style catalog and prompt building for the image provider.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from src.specs.common.enums import StyleId

_NO_BRANDING = "ABSOLUTELY NO logos, text, labels, or branding anywhere in the image"


@dataclass(frozen=True)
class StyleOption:
    id: StyleId
    name: str
    description: str
    category: str
    platforms: Tuple[str, ...]
    system_prompt: str


STYLE_OPTIONS: List[StyleOption] = [
    StyleOption(
        id=StyleId.ISOMETRIC,
        name="Isometric",
        description="Modern 3D isometric illustration style",
        category="professional",
        platforms=("linkedin", "instagram", "facebook"),
        system_prompt=(
            "Create a professional isometric 3D business illustration:\n\n"
            "STYLE: Clean isometric perspective, modern 3D graphics with sharp geometric shapes\n"
            "BACKGROUND: Vibrant gradient from deep purple to orange to magenta (brand colors)\n"
            "ELEMENTS: Business professionals, floating screens with data visualizations, laptops, modern technology\n"
            "AESTHETIC: Professional B2B social media quality with clean lines and minimal shadows\n\n"
            "CRITICAL REQUIREMENTS:\n"
            "- Square format (1080x1080)\n"
            f"- {_NO_BRANDING}\n"
            "- Natural composition that flows throughout the entire image"
        ),
    ),
    StyleOption(
        id=StyleId.NEWYORK_CARTOON,
        name="New York Cartoon B&W",
        description="Black and white cartoon illustration with urban flair",
        category="creative",
        platforms=("linkedin", "twitter", "instagram"),
        system_prompt=(
            "Create a black and white cartoon illustration with New York urban aesthetic:\n\n"
            "STYLE: Bold line art cartoon style, hand-drawn appearance, urban New York vibes\n"
            "COLOR PALETTE: Strictly black and white only - no color, no gradients, only pure B&W\n"
            "ELEMENTS: Business professionals in cartoon style, urban cityscape elements, office buildings, briefcases\n"
            "AESTHETIC: Editorial cartoon style reminiscent of New York newspapers and magazines\n\n"
            "CRITICAL REQUIREMENTS:\n"
            "- Square format (1080x1080)\n"
            "- STRICTLY BLACK AND WHITE ONLY - no color whatsoever\n"
            f"- {_NO_BRANDING}\n"
            "- Cartoon/illustration style, not photorealistic"
        ),
    ),
    StyleOption(
        id=StyleId.MINIMALIST_LINKEDIN,
        name="Minimalist LinkedIn",
        description="Clean, professional LinkedIn-optimized style",
        category="minimalist",
        platforms=("linkedin",),
        system_prompt=(
            "Create a minimalist professional illustration optimized for LinkedIn:\n\n"
            "STYLE: Clean, modern minimalist design with plenty of white space\n"
            "COLOR PALETTE: primary purple (#6D08BE), secondary orange (#FFB703), accent magenta (#DD1286), "
            "with neutral grays and white\n"
            "ELEMENTS: Simple geometric shapes, clean icons, professional symbols, minimal human figures\n"
            "AESTHETIC: Corporate presentation style, infographic-inspired, highly readable on mobile\n\n"
            "CRITICAL REQUIREMENTS:\n"
            "- Square format (1080x1080)\n"
            f"- {_NO_BRANDING}\n"
            "- High contrast for mobile viewing"
        ),
    ),
]

_BY_ID: Dict[str, StyleOption] = {s.id.value: s for s in STYLE_OPTIONS}


def get_style(style_id: Optional[str]) -> StyleOption:
    """Look up a style; unknown ids fall back to isometric."""
    return _BY_ID.get(getattr(style_id, "value", style_id) or "", STYLE_OPTIONS[0])


def build_prompt(style_id: Optional[str], message: str, headline: Optional[str] = None) -> str:
    context = message.strip()
    if headline and headline.strip():
        context = f"{headline.strip()}. {context}"
    return (
        f"{get_style(style_id).system_prompt}\n\n"
        f"BUSINESS CONTEXT: {context}\n\n"
        "Please create an illustration that incorporates this business context "
        "while following all the style requirements above."
    )
