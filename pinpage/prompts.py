from typing import Sequence

from .models import ContentBlock, GenerationConfig

SYSTEM_PROMPT = """You are a web page component generator. Generate components for a page builder system.

Available component types:
- heading: Large title text (use for main titles and section headers)
- text: Inline text (use for short text snippets)
- paragraph: Block of text (use for longer content, descriptions, body text)
- image: Single image with URL (use for photos, illustrations, graphics)
- gallery: Grid of multiple images (use for photo collections, portfolios)
- button: Interactive button with actions (use for CTAs, links, interactions)
- divider: Horizontal line separator (use to separate sections)
- emoji: A single emoji character shown large (use for decoration or mood)
- html: Custom HTML content (use sparingly for special formatting)

For each component, provide:
- type: Component type from the list above
- content: The main content (text for text/heading/paragraph, URL for image, button label for button, emoji character for emoji, HTML for html, empty string for divider)
- style: Styling properties object with these optional fields:
  - textAlign: 'left' | 'center' | 'right'
  - fontSize: CSS size string (e.g., '16px', '2rem', '24px')
  - color: CSS color (hex, rgb, or named color)
  - backgroundColor: CSS color or 'transparent'
  - padding: CSS padding (e.g., '8px', '16px 24px')
  - margin: CSS margin (e.g., '8px 0')
  - width: CSS width (e.g., '100%', '50%', '300px')
  - borderRadius: CSS border radius (e.g., '0px', '8px', '50%')
  - galleryColumns: number (for gallery only, default 3)
  - galleryGap: CSS gap (for gallery only, e.g., '16px')
- action: For buttons only, object with:
  - type: 'none' | 'link' | 'confetti' | 'alert' | 'spookyEmojis' | 'singleEmoji'
  - value: URL for 'link', message for 'alert'
  - emoji: emoji character for 'singleEmoji'
- images: For galleries only, array of image URLs (strings)

Return ONLY a valid JSON object with this exact structure:
{
  "components": [
    {
      "type": "heading",
      "content": "Welcome",
      "style": {
        "textAlign": "center",
        "fontSize": "48px",
        "color": "#333333"
      }
    }
  ]
}

Important guidelines:
- Generate 3-8 components per request unless specified otherwise
- Use appropriate component types for the content
- Include realistic, descriptive content
- Apply appropriate styling for visual appeal
- For images, use placeholder URLs like "https://via.placeholder.com/600x400" or suggest descriptive URLs
- For galleries, include 3-6 images
- Make buttons actionable with appropriate action types
- Do not use script tags, inline event handlers or javascript: URLs in html components
- Ensure all JSON is valid and properly formatted
- Do not include any text outside the JSON object"""

TONE_GUIDANCE = {
    "professional": "Use professional, business-appropriate language and formal tone.",
    "casual": "Use friendly, conversational language and relaxed tone.",
    "creative": "Use imaginative, expressive language with creative flair.",
    "minimal": "Use concise, minimal language with clean, simple design.",
}

THEME_GUIDANCE = {
    "dark": "Use light text colors on dark backgrounds (e.g., #ffffff text, #1a1a1a backgrounds).",
    "light": "Use dark text colors on light backgrounds (e.g., #333333 text, #ffffff backgrounds).",
}

AVOID_IMAGES = "Avoid using image and gallery components."
AVOID_BUTTONS = "Avoid using button components."


def build_system_prompt() -> str:
    return SYSTEM_PROMPT


def enhance_prompt(
    user_prompt: str,
    config: GenerationConfig,
    existing_blocks: Sequence[ContentBlock] = (),
) -> str:
    parts = [
        f"User request: {user_prompt}",
        f"Tone: {TONE_GUIDANCE[config.tone]}",
    ]

    if config.theme_preference != "auto":
        parts.append(f"Theme: {THEME_GUIDANCE[config.theme_preference]}")

    if config.preferred_kinds:
        parts.append(f"Preferred components: {', '.join(config.preferred_kinds)}")

    if config.max_components:
        parts.append(f"Maximum components: {config.max_components}")

    if config.include_images is False:
        parts.append(AVOID_IMAGES)
    if config.include_buttons is False:
        parts.append(AVOID_BUTTONS)

    if existing_blocks:
        parts.append(
            f"Note: The page already has {len(existing_blocks)} component(s). "
            "Generate components that complement the existing content."
        )

    return "\n\n".join(parts)
