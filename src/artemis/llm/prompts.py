"""LLM prompt templates."""

from ..models.data import AnalysisRequest, ArticleAnalysis

SYSTEM_INSTRUCTION = """You are ARTEMIS (AI Real-Time Event Monitoring & Intelligence System), a specialized Sentinel for Social Harmony and Public Safety.

Your Core Objective:
Analyze content from social media (Facebook, TikTok, X, Instagram) and news feeds to detect high-risk content that is:
1. Harmful to public thoughts or ideology.
2. Disrespectful or mocking towards religious sacred scripts, beliefs, or figures.
3. Inciting public unrest or violence.

Scoring Criteria:
- Content attacking religious beliefs or sacred texts must be labeled 'Very Negative' and categorized as 'Religious Desecration'.
- Content spreading dangerous ideologies or hate speech must be scored strictly.

Extraction Task:
- Identify and extract any social media handles, page names, channel IDs, or URLs mentioned in the content or source.
- Construct valid URLs for these entities if possible (e.g., if "@user" on X, link to x.com/user).

Constraint/Output Format Instruction:
Strictly generate only a single JSON object."""

ANALYSIS_JSON_SHAPE = """Respond in JSON format with this structure:
{
  "article_id": "a UUID",
  "source": "...",
  "date": "YYYY-MM-DD",
  "summary": "A concise summary of the post/article.",
  "primary_topic": "Technology | Finance/Markets | Politics/Policy | Health/Science | Environment | Sports | Culture/Lifestyle | Religion/Beliefs | Social Unrest | Other",
  "sentiment_score": -1.0 to 1.0,
  "sentiment_label": "Very Negative | Negative | Neutral | Positive | Very Positive",
  "risk_category": "None | Religious Desecration | Ideological Subversion | Hate Speech | Public Incitement | Misinformation",
  "key_entities": ["3-5 key organizations, people, or products"],
  "references": [{"type": "Profile | Page | Group | Channel | External", "name": "...", "url": "..."}]
}"""


def format_analysis_prompt(request: AnalysisRequest) -> list[dict[str, str]]:
    """
    Format the content analysis prompt.

    Args:
        request: Raw content and its origin

    Returns:
        List of message dicts for LLM API
    """
    user_prompt = (
        f"Raw Content / Caption: {request.text}\n"
        f"Platform/Source: {request.source}\n"
        f"Date: {request.date}"
    )

    return [
        {"role": "system", "content": f"{SYSTEM_INSTRUCTION}\n\n{ANALYSIS_JSON_SHAPE}"},
        {"role": "user", "content": user_prompt},
    ]


def format_alert_summary_prompt(analysis: ArticleAnalysis) -> list[dict[str, str]]:
    """Format the short urgent alert line prompt."""
    prompt = f"""Context: High Sensitivity Social Monitor.
Risk Category: {analysis.risk_category}
Summary: "{analysis.summary}"

Task: Write a very brief, urgent email alert subject line and body intro (max 30 words total).
Format: "URGENT [CATEGORY]: [Actionable Warning]\""""

    return [{"role": "user", "content": prompt}]


def format_alert_email_prompt(analysis: ArticleAnalysis, recipient: str) -> list[dict[str, str]]:
    """
    Format the formal alert email prompt.

    Args:
        analysis: The flagged analysis
        recipient: Email address the alert is addressed to

    Returns:
        List of message dicts for LLM API
    """
    prompt = f"""You are ARTEMIS, an automated intelligence security officer.

Task: Write a formal alert email to {recipient} regarding a detected high-risk item.

Incident Details:
- Source: {analysis.source}
- IP Address: {analysis.ip_address}
- Date: {analysis.date}
- Risk Category: {analysis.risk_category}
- Detected Topics: {analysis.primary_topic}
- Summary: {analysis.summary}
- Key Entities: {', '.join(analysis.key_entities)}

Requirements:
- Subject Line: Urgent [Risk Category] Alert from ARTEMIS
- Tone: Professional, Direct, Urgent.
- Body: summarize the finding, explain why it was flagged, and recommend immediate review of the source URL.
- Output: JSON format with "subject" and "body" fields."""

    return [{"role": "user", "content": prompt}]


def format_scan_report_prompt(articles: list[ArticleAnalysis]) -> list[dict[str, str]]:
    """Format the executive scan summary prompt."""
    summaries = "\n".join(f"- [{a.risk_category}] {a.source}: {a.summary}" for a in articles)

    prompt = f"""Task: write an executive summary of a social media security scan result.

Data:
{summaries}

Requirements:
- 1-2 sentences summarizing the overall threat level, key topics detected, and if any action is needed.
- Be professional, concise, and direct.
- Example: "The scan detected 2 high-risk items related to Religious Desecration on Facebook. Overall sentiment is negative due to trending hate speech topics.\""""

    return [{"role": "user", "content": prompt}]


def format_scrape_simulation_prompt(count: int, platform: str) -> list[dict[str, str]]:
    """
    Format the simulated social scrape prompt.

    Args:
        count: Number of posts to generate
        platform: Platform or mix of platforms to imitate

    Returns:
        List of message dicts for LLM API
    """
    prompt = f"""Task: Simulate scraping raw text from social media posts on {platform}.
Generate {count} distinct, realistic posts.

CRITICAL REQUIREMENT:
At least one post MUST contain sensitive content harmful to religious beliefs, sacred scripts, or public ideology to test the system's detection capabilities.
The others can be neutral or standard news.

Include realistic social media handles (e.g., @username), page names, or links within the text to allow for source tracking.
Generate a realistic IPv4 or IPv6 address for each post representing the user's origin.
Generate a realistic direct permalink URL for each post.

Respond in JSON format with this structure:
{{
  "posts": [
    {{"text": "...", "source": "...", "url": "...", "date": "YYYY-MM-DD", "ip_address": "..."}}
  ]
}}"""

    return [{"role": "user", "content": prompt}]


def format_ecommerce_prompt() -> list[dict[str, str]]:
    """Format the e-commerce market snapshot prompt."""
    prompt = """Act as an expert Global E-Commerce Market Analyst.

Task: Generate a real-time intelligence dashboard snapshot.
1. Identify 3 currently trending "buying/selling cultures" or consumer behaviors (e.g., Live Shopping, Sustainable Packaging, 'De-influencing').
2. Simulate aggregate Purchase Order metrics for 4 major platforms: Amazon, Shopify, TikTok Shop, Instagram Checkout. Provide realistic volume numbers and a customer satisfaction score (0-100).
3. Identify 5 "Most Loved" trending products. For each, provide a name, price, rating (1-5), sentiment score (-1 to 1), and a brief review snippet summarizing why people love it.

Output: A single JSON object with "trends", "platforms" and "products" arrays."""

    return [{"role": "user", "content": prompt}]
