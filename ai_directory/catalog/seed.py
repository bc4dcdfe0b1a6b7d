"""
Demo data for a freshly started catalogue.

``seed_demo_data()`` fills an empty ``CatalogStore`` with one category
per entry of ``DEMO_CATEGORIES`` and two tools per category, then gives
the first featured tool a blog post, a getting-started guide and two
prompt templates so that the detail page has something to show.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from .schemas import BlogCreate, CategoryCreate, GuideCreate, PromptCreate, ToolCreate
from .store import CatalogStore

logger = logging.getLogger(__name__)


# (name, slug, description)
DEMO_CATEGORIES: List[Tuple[str, str, str]] = [
    ("Conversational AI", "conversational-ai", "AI chatbots and virtual assistants"),
    ("Content Writing", "content-writing", "AI tools for content creation"),
    ("Copywriting", "copywriting", "AI copywriting and marketing content"),
    ("Image Generation", "image-generation", "AI image creation tools"),
    ("Video Generation", "video-generation", "AI video creation and editing"),
    ("Audio Processing", "audio-processing", "AI audio enhancement and processing"),
    ("Coding", "coding", "AI coding assistants"),
    ("Translation", "translation", "AI language translation tools"),
    ("Data Analysis", "data-analysis", "AI data analytics tools"),
    ("Legal Tech", "legal-tech", "AI legal assistance tools"),
    ("Healthcare", "healthcare", "AI healthcare solutions"),
    ("Finance", "finance", "AI financial tools"),
    ("Education", "education", "AI education tools"),
    ("Research", "research", "AI research assistants"),
    ("Design", "design", "AI design tools"),
    ("Email", "email", "AI email assistance"),
    ("Marketing", "marketing", "AI marketing tools"),
    ("SEO", "seo", "AI SEO optimization"),
    ("Social Media", "social-media", "AI social media management"),
    ("Customer Service", "customer-service", "AI customer support"),
    ("Sales", "sales", "AI sales tools"),
    ("HR", "hr", "AI HR and recruitment"),
    ("Security", "security", "AI security tools"),
    ("Analytics", "analytics", "AI analytics platforms"),
    ("Productivity", "productivity", "AI productivity tools"),
    ("Gaming", "gaming", "AI gaming tools"),
    ("Music", "music", "AI music creation"),
    ("Real Estate", "real-estate", "AI real estate tools"),
    ("Manufacturing", "manufacturing", "AI manufacturing solutions"),
    ("Agriculture", "agriculture", "AI agriculture tools"),
    ("Science", "science", "AI scientific tools"),
    ("Transportation", "transportation", "AI transportation solutions"),
    ("Energy", "energy", "AI energy management"),
    ("Retail", "retail", "AI retail solutions"),
]

# category slug -> [(name, slug, description, website url)]
DEMO_TOOLS: Dict[str, List[Tuple[str, str, str, str]]] = {
    "conversational-ai": [
        ("ChatGPT", "chatgpt", "OpenAI's advanced conversational AI", "https://chat.openai.com"),
        ("Claude", "claude", "Anthropic's AI assistant", "https://claude.ai"),
    ],
    "content-writing": [
        ("Jasper", "jasper", "AI content writing platform", "https://jasper.ai"),
        ("WriteSonic", "writesonic", "AI writing assistant", "https://writesonic.com"),
    ],
    "copywriting": [
        ("Copy.ai", "copyai", "AI copywriting tool", "https://copy.ai"),
        ("Rytr", "rytr", "AI writing platform", "https://rytr.me"),
    ],
    "image-generation": [
        ("Midjourney", "midjourney", "AI image generation tool", "https://midjourney.com"),
        ("DALL-E 2", "dall-e-2", "OpenAI's image generation model", "https://openai.com/dall-e-2"),
    ],
    "video-generation": [
        ("RunwayML", "runwayml", "AI video editing platform", "https://runwayml.com"),
        ("Synthesia", "synthesia", "AI video generation platform", "https://synthesia.io"),
    ],
    "audio-processing": [
        ("Descript", "descript", "AI audio editing software", "https://descript.com"),
        ("Adobe Audition", "adobe-audition", "Professional audio editing software", "https://adobe.com/audition"),
    ],
    "coding": [
        ("GitHub Copilot", "github-copilot", "AI pair programmer", "https://github.com/features/copilot"),
        ("Tabnine", "tabnine", "AI code completion tool", "https://tabnine.com"),
    ],
    "translation": [
        ("DeepL", "deepl", "AI translation service", "https://deepl.com"),
        ("Google Translate", "google-translate", "Google's translation service", "https://translate.google.com"),
    ],
    "data-analysis": [
        ("Tableau", "tableau", "Data visualization tool", "https://tableau.com"),
        ("Power BI", "power-bi", "Microsoft's data analytics tool", "https://powerbi.microsoft.com"),
    ],
    "legal-tech": [
        ("ROSS Intelligence", "ross-intelligence", "AI legal research platform", "https://rossintelligence.com"),
        ("Kira Systems", "kira-systems", "AI contract analysis", "https://kirasystems.com"),
    ],
    "healthcare": [
        ("IBM Watson Health", "ibm-watson-health", "AI healthcare solutions", "https://www.ibm.com/watson-health"),
        ("PathAI", "pathai", "AI-powered pathology", "https://www.pathai.com/"),
    ],
    "finance": [
        ("Kensho", "kensho", "AI financial analysis",
         "https://www.spglobal.com/en/solutions/kensho-artificial-intelligence"),
        ("Numerai", "numerai", "AI-driven hedge fund", "https://numer.ai/"),
    ],
    "education": [
        ("Quizlet", "quizlet", "AI-powered learning tools", "https://quizlet.com"),
        ("Coursera", "coursera", "Online learning platform", "https://coursera.org"),
    ],
    "research": [
        ("Semantic Scholar", "semantic-scholar", "AI-powered research tool", "https://semanticscholar.org"),
        ("ResearchGate", "researchgate", "Network for scientists and researchers", "https://researchgate.net"),
    ],
    "design": [
        ("Canva", "canva", "Online design tool", "https://canva.com"),
        ("Adobe Creative Cloud", "adobe-creative-cloud", "Suite of design software", "https://adobe.com/creativecloud"),
    ],
    "email": [
        ("Gmail Smart Compose", "gmail-smart-compose", "AI-powered email composition", "https://gmail.com"),
        ("Mailchimp", "mailchimp", "Email marketing platform", "https://mailchimp.com"),
    ],
    "marketing": [
        ("HubSpot", "hubspot", "Marketing automation platform", "https://hubspot.com"),
        ("Marketo", "marketo", "Marketing automation software", "https://marketo.com"),
    ],
    "seo": [
        ("SEMrush", "semrush", "SEO toolkit", "https://semrush.com"),
        ("Ahrefs", "ahrefs", "SEO toolset", "https://ahrefs.com"),
    ],
    "social-media": [
        ("Buffer", "buffer", "Social media management tool", "https://buffer.com"),
        ("Hootsuite", "hootsuite", "Social media management platform", "https://hootsuite.com"),
    ],
    "customer-service": [
        ("Zendesk", "zendesk", "Customer service software", "https://zendesk.com"),
        ("Salesforce Service Cloud", "salesforce-service-cloud", "Customer service platform",
         "https://salesforce.com/servicecloud"),
    ],
    "sales": [
        ("Salesforce Sales Cloud", "salesforce-sales-cloud", "Sales automation software",
         "https://salesforce.com/salescloud"),
        ("Outreach", "outreach", "Sales engagement platform", "https://outreach.io"),
    ],
    "hr": [
        ("Workday", "workday", "HR management software", "https://workday.com"),
        ("BambooHR", "bamboohr", "HR software for small businesses", "https://bamboohr.com"),
    ],
    "security": [
        ("Darktrace", "darktrace", "AI cybersecurity platform", "https://darktrace.com"),
        ("CrowdStrike", "crowdstrike", "Cloud-based endpoint protection", "https://crowdstrike.com"),
    ],
    "analytics": [
        ("Google Analytics", "google-analytics", "Web analytics service", "https://analytics.google.com"),
        ("Mixpanel", "mixpanel", "Product analytics platform", "https://mixpanel.com"),
    ],
    "productivity": [
        ("Notion", "notion", "All-in-one workspace", "https://notion.so"),
        ("Monday.com", "monday-com", "Work management platform", "https://monday.com"),
    ],
    "gaming": [
        ("Unity", "unity", "Game development platform", "https://unity.com"),
        ("Unreal Engine", "unreal-engine", "Game engine", "https://unrealengine.com"),
    ],
    "music": [
        ("Amper Music", "amper-music", "AI music composition", "https://ampermusic.com"),
        ("Jukebox (OpenAI)", "jukebox-openai", "AI music generation model", "https://openai.com/blog/jukebox/"),
    ],
    "real-estate": [
        ("Zillow", "zillow", "Real estate marketplace", "https://zillow.com"),
        ("Redfin", "redfin", "Real estate brokerage", "https://redfin.com"),
    ],
    "manufacturing": [
        ("Plex", "plex", "Manufacturing ERP software", "https://plex.com"),
        ("Seeq", "seeq", "Advanced analytics for manufacturing", "https://seeq.com"),
    ],
    "agriculture": [
        ("John Deere", "john-deere", "Precision agriculture technology", "https://www.deere.com/en/index.html"),
        ("The Climate Corporation", "the-climate-corporation", "Digital agriculture solutions", "https://climate.com"),
    ],
    "science": [
        ("Benchling", "benchling", "Cloud platform for biotech", "https://benchling.com"),
        ("RSpace", "rspace", "Electronic lab notebook", "https://researchspace.com"),
    ],
    "transportation": [
        ("Waymo", "waymo", "Autonomous driving technology", "https://waymo.com"),
        ("Tesla", "tesla", "Electric vehicles and autonomous driving", "https://tesla.com"),
    ],
    "energy": [
        ("Opower", "opower", "Energy efficiency software", "https://opower.com"),
        ("Uplight", "uplight", "Energy customer engagement", "https://uplight.com"),
    ],
    "retail": [
        ("Shopify", "shopify", "E-commerce platform", "https://shopify.com"),
        ("Amazon", "amazon", "Online retailer", "https://amazon.com"),
    ],
}

FEATURED_SLUGS = {"chatgpt", "claude", "midjourney", "github-copilot"}

GUIDE_STEPS = [
    "Sign up for an account on their website",
    "Complete the initial setup wizard",
    "Create your first project",
    "Experiment with different settings to find what works best",
    "Review the results and refine your approach",
]


def _blog_content(name: str, description: str) -> str:
    return (
        f"# The Ultimate Guide to {name}\n\n"
        "## Introduction\n\n"
        f"{name} is one of the most powerful AI tools available today. In this "
        "comprehensive guide, we'll explore its capabilities and show you how to "
        "get the most value from it.\n\n"
        "## Key Features\n\n"
        f"{description}\n\n"
        "## Best Practices\n\n"
        f"To get the most out of {name}, follow these best practices..."
    )


def seed_demo_data(store: CatalogStore) -> None:
    """Populate ``store`` with the demo categories, tools and content."""
    category_ids: Dict[str, int] = {}
    for name, slug, description in DEMO_CATEGORIES:
        category = store.create_category(
            CategoryCreate(name=name, slug=slug, description=description)
        )
        category_ids[slug] = category.id
        logger.debug("Created category: %s", category.name)

    for category_slug, tools in DEMO_TOOLS.items():
        category_id = category_ids.get(category_slug)
        if category_id is None:
            continue
        for name, slug, description, url in tools:
            store.create_tool(
                ToolCreate(
                    name=name,
                    slug=slug,
                    description=description,
                    category_id=category_id,
                    website_url=url,
                    featured=slug in FEATURED_SLUGS,
                )
            )
            logger.debug("Created tool: %s", name)

    featured = store.get_featured_tools()
    if featured:
        first = featured[0]
        store.create_blog(
            BlogCreate(
                tool_id=first.id,
                title=f"Ultimate Guide to Using {first.name}",
                content=_blog_content(first.name, first.description),
            )
        )
        store.create_guide(
            GuideCreate(
                tool_id=first.id,
                title=f"How to Get Started with {first.name}",
                steps=list(GUIDE_STEPS),
            )
        )
        store.create_prompt(
            PromptCreate(
                tool_id=first.id,
                title="General Purpose Template",
                prompt_text=(
                    "I want you to act as an expert in [TOPIC]. Please provide "
                    "detailed information about [SPECIFIC QUESTION]."
                ),
            )
        )
        store.create_prompt(
            PromptCreate(
                tool_id=first.id,
                title="Creative Writing Template",
                prompt_text=(
                    "Write a [STYLE] story about [TOPIC] with the following characters: "
                    "[CHARACTER LIST]. The story should include themes of [THEMES] and "
                    "take place in [SETTING]."
                ),
            )
        )

    logger.info(
        "Seeded demo data: %d categories, %d tools",
        len(store.get_categories()),
        len(store.get_tools()),
    )
