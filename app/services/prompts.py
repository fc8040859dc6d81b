"""Prompt text and response schema for the article generation call."""

from app.models.generation_request import GenerationRequest

ARTICLE_FIELDS = (
    "seoTitle",
    "metaDescription",
    "focusKeyword",
    "permalinkSuggestion",
    "tags",
    "blogOutline",
    "fullArticle",
    "featuredImagePrompt",
    "faq",
)

# OpenAPI-subset schema understood by Gemini's structured-output mode.
ARTICLE_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "seoTitle": {
            "type": "STRING",
            "description": "A catchy, SEO-optimized title for the blog post.",
        },
        "metaDescription": {
            "type": "STRING",
            "description": "A concise meta description between 150 and 160 characters.",
        },
        "focusKeyword": {
            "type": "STRING",
            "description": "The primary SEO focus keyword for the article.",
        },
        "permalinkSuggestion": {
            "type": "STRING",
            "description": "A short URL slug using hyphens to separate words.",
        },
        "tags": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "minItems": 5,
            "maxItems": 7,
        },
        "blogOutline": {
            "type": "STRING",
            "description": "Outline using markdown headings (## / ###), newline separated.",
        },
        "fullArticle": {
            "type": "STRING",
            "description": "The complete article with markdown headings, paragraphs and lists.",
        },
        "featuredImagePrompt": {
            "type": "STRING",
            "description": "A descriptive prompt for an AI image generator.",
        },
        "faq": {
            "type": "ARRAY",
            "minItems": 3,
            "maxItems": 5,
            "items": {
                "type": "OBJECT",
                "properties": {
                    "question": {"type": "STRING"},
                    "answer": {"type": "STRING"},
                },
                "required": ["question", "answer"],
            },
        },
    },
    "required": list(ARTICLE_FIELDS),
    "propertyOrdering": list(ARTICLE_FIELDS),
}

_ARTICLE_INTERFACE = """\
interface Article {
  seoTitle: string; // A catchy, SEO-optimized title for the blog post.
  metaDescription: string; // A concise meta description between 150 and 160 characters.
  focusKeyword: string; // The primary SEO focus keyword for the article.
  permalinkSuggestion: string; // A short, SEO-friendly URL slug using hyphens (e.g. "my-awesome-post").
  tags: string[]; // An array of 5-7 relevant tags or keywords.
  blogOutline: string; // A structured outline using markdown headings ("## Introduction", "### Sub-point 1").
  fullArticle: string; // The complete, plagiarism-free article with markdown formatting.
  featuredImagePrompt: string; // A descriptive prompt for an AI image generator.
  faq: { question: string; answer: string; }[]; // 3-5 FAQs with concise answers.
}"""


def build_article_prompt(request: GenerationRequest) -> str:
    """Fold the request parameters into the natural-language generation instruction."""
    return f"""\
You are an expert blog article writer and SEO specialist. Your task is to generate a complete blog post based on the provided specifications.

Please generate a comprehensive blog post on the topic: "{request.topic}".

The full blog article should be written with the generated SEO keywords naturally integrated.

Adhere to the following requirements:
1. Word Count: Approximately {request.target_word_count} words.
2. Language: Write the entire content in {request.language}. If "Hindi-English Mix" is selected, use a natural blend of both languages (Hinglish).
3. Tone: The tone of the article must be {request.tone}. If "Human touch" is selected, write in a personal, relatable, and engaging style, as if a real person is sharing their experience.
4. Structure: The output must be a single, valid JSON object that strictly conforms to the following interface. Do not include any explanatory text, markdown code fences, or anything else before or after the JSON object.
{_ARTICLE_INTERFACE}
5. Content: The content must be unique, plagiarism-free, and SEO-friendly with natural keyword placement.
6. Formatting: "fullArticle" and "blogOutline" must each be a single string containing markdown for structure (## for H2, ### for H3, - for bullet points, and \\n for new lines).
7. SEO: Generate a focus keyword, a permalink suggestion, and an array of 5-7 tags.
8. FAQ Section: Generate 3-5 relevant "Frequently Asked Questions" with concise answers related to the main topic.
"""
