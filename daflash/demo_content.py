"""Placeholder marketing content served while the store has none of its own."""

from __future__ import annotations

from decimal import Decimal

from daflash.models.catalog import BillingType
from daflash.models.content import (
    AboutStat,
    LandingPageContent,
    LandingPageFeature,
    PortfolioSiteContent,
    PricingPlanContent,
    ServiceContent,
    ServiceHighlight,
    SiteSettingsContent,
    TestimonialContent,
)
from daflash.models.document_ref import PlaceholderRef

_WHITE_LABEL = (
    "No mention of us anywhere. When clients visit your website, they see only you, "
    "a professional, polished presence that's entirely yours."
)

DEMO_SERVICES = [
    ServiceContent(
        ref=PlaceholderRef(key="service-1"),
        name="Online Presence",
        slug="online-presence",
        icon="Globe",
        tagline="Your Business, Ready to Impress",
        description=(
            "From zero to professional in 4 simple steps: domain, professional email, "
            "a custom logo and a website ready to launch."
        ),
        highlights=[
            ServiceHighlight(title="Domain Selection", description="We help you choose and secure the perfect domain."),
            ServiceHighlight(title="Professional Email", description="Google Workspace or Office 365 setup."),
            ServiceHighlight(title="Logo Design", description="A custom logo that reflects your brand."),
            ServiceHighlight(title="Website Launch", description="A professional website ready to represent you."),
        ],
        order=1,
    ),
    ServiceContent(
        ref=PlaceholderRef(key="service-2"),
        name="Drone Services",
        slug="drone-services",
        icon="Camera",
        tagline="Aerial Photography & Video",
        description="Indoor and outdoor aerial photography and video for listings, construction and inspections.",
        highlights=[
            ServiceHighlight(title="Indoor Aerial", description="Interior photography and video for listings."),
            ServiceHighlight(title="Outdoor Aerial", description="Exterior shots, progress documentation, roof inspections."),
        ],
        order=2,
    ),
    ServiceContent(
        ref=PlaceholderRef(key="service-3"),
        name="IT Services",
        slug="it-services",
        icon="Headphones",
        tagline="Impactful IT Solutions",
        description="Expert IT support on demand without a full-time admin, plus day-to-day support.",
        highlights=[
            ServiceHighlight(title="Fractional IT Admin", description="Professional help when you need it."),
            ServiceHighlight(title="Ongoing Support", description="From crashed laptops to software issues."),
        ],
        order=3,
    ),
]

DEMO_PRICING_PLANS = [
    PricingPlanContent(
        ref=PlaceholderRef(key="pricing-1"),
        name="Website",
        price=Decimal("250"),
        billing_frequency=BillingType.ONE_TIME,
        features=["Professional design & development", "Mobile responsive", "Contact form", "SEO basics"],
        order=1,
    ),
    PricingPlanContent(
        ref=PlaceholderRef(key="pricing-2"),
        name="Professional Email Setup",
        price=Decimal("200"),
        features=["Google Workspace or Office 365", "Custom domain email", "DNS configuration", "Migration support"],
        order=2,
    ),
    PricingPlanContent(
        ref=PlaceholderRef(key="pricing-3"),
        name="Drone Services",
        price=Decimal("200"),
        features=["Aerial photography & video", "20 minutes flight time included", "Professional editing"],
        cta_text="Book a Flight",
        order=3,
    ),
]

DEMO_PORTFOLIO_SITES = [
    PortfolioSiteContent(ref=PlaceholderRef(key=f"portfolio-{i}"), client_name=name, website_url=url, order=i)
    for i, (name, url) in enumerate(
        [
            ("WDI Global", "https://wdiglobal.com"),
            ("NG Smart ENG", "https://ngse.co.il"),
            ("Clinical Stadi", "https://clinicalstadi.com"),
            ("AMG Project Management", "https://amgpm.com"),
            ("NNERV", "https://nnerv.com"),
        ],
        start=1,
    )
]

DEMO_TESTIMONIALS = [
    TestimonialContent(
        ref=PlaceholderRef(key="testimonial-1"),
        client_name="Ilan Wise",
        quote="In less than 24 hours they created a sleek, functional site that perfectly reflects our brand.",
        company_name="WDI Global",
        company_url="https://wdiglobal.com",
        is_featured=True,
        order=1,
    ),
    TestimonialContent(
        ref=PlaceholderRef(key="testimonial-2"),
        client_name="Aron Miller",
        quote="They rebuilt everything from scratch and the result is even better than the original.",
        company_name="AMG Project Management",
        company_url="https://amgpm.com",
        is_featured=True,
        order=2,
    ),
    TestimonialContent(
        ref=PlaceholderRef(key="testimonial-3"),
        client_name="Igal D.",
        quote="Domain setup, DNS, email connections: handled with care and clear guidance.",
        company_name="Igal Davidi Coaching",
        company_url="https://igaldavidi.com",
        order=3,
    ),
]

DEMO_LANDING_PAGES = {
    "realtors": LandingPageContent(
        ref=PlaceholderRef(key="landing-realtors"),
        page_id="realtors",
        hero_headline="Websites for Real Estate Agents",
        hero_subtitle="A complete digital presence platform built specifically for realtors.",
        features=[
            LandingPageFeature(icon="User", title="Professional Bio"),
            LandingPageFeature(icon="Home", title="Property Listings"),
            LandingPageFeature(icon="MapPin", title="Neighborhoods"),
            LandingPageFeature(icon="Users", title="Lead Capture"),
            LandingPageFeature(icon="List", title="Deal Pipeline"),
        ],
        white_label_text=_WHITE_LABEL,
    ),
    "contractors": LandingPageContent(
        ref=PlaceholderRef(key="landing-contractors"),
        page_id="contractors",
        hero_headline="Websites for Contractors",
        hero_subtitle="A complete digital presence platform built specifically for contractors.",
        features=[
            LandingPageFeature(icon="User", title="Professional Bio"),
            LandingPageFeature(icon="FolderOpen", title="Project Portfolio"),
            LandingPageFeature(icon="Wrench", title="Services Offered"),
            LandingPageFeature(icon="Users", title="Lead Capture"),
            LandingPageFeature(icon="ShieldCheck", title="License & Insurance"),
        ],
        white_label_text=_WHITE_LABEL,
    ),
}

DEMO_SITE_SETTINGS = SiteSettingsContent(
    ref=PlaceholderRef(key="site-settings"),
    hero_headline="Domain. Email. Website. In 24 Hours.",
    hero_subtitle="We build your complete professional online presence, lightning fast.",
    about_headline="About daflash",
    about_stats=[
        AboutStat(value="24h", label="Average Delivery"),
        AboutStat(value="100%", label="White Label"),
    ],
    contact_email="contact@daflash.com",
    company_specialty="Digital Services & Web Development",
    default_contract_terms=(
        "1. PAYMENT TERMS\nPayment is due according to the schedule outlined in this agreement.\n\n"
        "2. OWNERSHIP\nUpon full payment, the client receives full ownership of all deliverables.\n\n"
        "3. CANCELLATION\nEither party may cancel with 30 days written notice."
    ),
)
