"""Pydantic schemas for LLM structured outputs."""

from pydantic import BaseModel, Field

from ..models.data import PrimaryTopic, ReferenceType, RiskCategory, SentimentLabel


class ReferenceSchema(BaseModel):
    """Schema for a referenced social entity."""

    type: ReferenceType
    name: str
    url: str


class AnalysisResponse(BaseModel):
    """Schema for the content analysis response."""

    article_id: str = Field(description="Generate a UUID")
    source: str
    date: str
    summary: str = Field(description="A concise summary of the post/article.")
    primary_topic: PrimaryTopic
    sentiment_score: float = Field(description="Score from -1.0 to 1.0")
    sentiment_label: SentimentLabel
    risk_category: RiskCategory
    key_entities: list[str] = Field(
        description="List 3-5 key organizations, people, or products."
    )
    references: list[ReferenceSchema] = Field(
        description="Extract mentioned social IDs, pages, or channels with their URLs."
    )


class AlertEmailResponse(BaseModel):
    """Schema for a generated alert email."""

    subject: str
    body: str


class SimulatedPost(BaseModel):
    """Schema for one simulated scraped post."""

    text: str
    source: str
    url: str = Field(description="A realistic permalink to the post")
    date: str
    ip_address: str = Field(description="A realistic Random IPv4 address")


class ScrapeBatchResponse(BaseModel):
    """Schema for a batch of simulated scraped posts."""

    posts: list[SimulatedPost]


class TrendSchema(BaseModel):
    id: str
    title: str
    description: str
    growth: str
    tag: str


class PlatformMetricSchema(BaseModel):
    platform: str
    order_volume: float
    customer_satisfaction: float


class ProductSchema(BaseModel):
    id: str
    product_name: str
    category: str
    price: str
    platform: str
    rating: float
    sentiment_score: float
    review_snippet: str


class EcommerceResponse(BaseModel):
    """Schema for the e-commerce intelligence snapshot."""

    trends: list[TrendSchema]
    platforms: list[PlatformMetricSchema]
    products: list[ProductSchema]
