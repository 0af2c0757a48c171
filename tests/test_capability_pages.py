import pytest
from fastapi.testclient import TestClient

from backend.pages import PAGES
from backend.server import create_app, format_score

VIDEO_URL = "https://www.youtube.com/watch?v=abc123"

# A valid form submission and a complete model reply for every page
CASES = {
    "ideas": (
        {"topic": "Home espresso", "target_audience": "Busy students", "style": "Educational"},
        {
            "ideas": [
                {
                    "title": "Espresso in 60 seconds",
                    "concept": "A speed run through a morning shot.",
                    "hook": "You are pulling it wrong.",
                    "viralPotential": 8,
                    "suitabilityScore": 7.5,
                }
            ]
        },
    ),
    "analyze": (
        {"video_url": VIDEO_URL},
        {
            "summary": "A cooking tutorial.",
            "viralMoments": [
                {
                    "timestamp": "1:23",
                    "duration": "14",
                    "description": "The souffle rises.",
                    "hookReason": "Visual payoff",
                    "viralScore": 9,
                }
            ],
            "keyQuotes": ["Butter is flavor."],
            "visualHighlights": [{"timestamp": "2:10", "description": "Overhead plating shot"}],
            "targetAudience": {
                "demographic": "Home cooks 25-40",
                "recommendedDuration": "30s",
                "hashtags": ["#cooking", "#souffle"],
            },
        },
    ),
    "script": (
        {
            "video_url": VIDEO_URL,
            "start_time": "1:23",
            "end_time": "1:38",
            "category": "Cooking",
            "duration": "15",
        },
        {
            "title": "The Souffle Secret",
            "description": "Why your souffle collapses.",
            "hook": "Stop opening the oven.",
            "script": [
                {
                    "timestamp": "0:03",
                    "narration": "Here is the trick nobody tells you.",
                    "textOverlay": "THE TRICK",
                    "visualDirection": "Zoom in on the ramekin",
                    "audioNote": "Bass drop",
                }
            ],
            "callToAction": "Follow for part two.",
            "engagementQuestions": ["What dish scares you most?"],
            "suggestedMusic": "Upbeat lo-fi",
            "estimatedViews": "50K-100K",
        },
    ),
    "optimize": (
        {"short_details": "A 30 second latte art tutorial", "category": "Coffee"},
        {
            "trendingTopics": ["Iced oat lattes"],
            "optimizedTitles": ["Latte Art in 30 Seconds"],
            "thumbnailText": ["POUR LIKE A PRO"],
            "description": "Learn the heart pour fast.",
            "hashtags": ["#latteart"],
            "postingTime": "Weekdays 7am",
            "trendingMusic": ["Coffee Shop Jazz Remix"],
            "uniqueAngles": ["Left-handed pouring"],
        },
    ),
    "series": (
        {"video_url": VIDEO_URL, "duration": "25:47"},
        {
            "seriesTitle": "The Build",
            "shorts": [
                {
                    "episodeNumber": 1,
                    "title": "Laying the Foundation",
                    "startTime": "0:00",
                    "endTime": "0:45",
                    "hook": "Wait for the pour",
                    "mainPoint": "Concrete needs rebar",
                    "cliffhanger": "Then the rain came",
                    "postingDateTime": "Monday 6pm",
                }
            ],
            "brandingElements": {
                "colorScheme": "Teal and orange",
                "fontStyle": "Bold sans",
                "introStyle": "Cold open",
            },
            "engagementTactics": ["Pin a poll comment"],
        },
    ),
    "competitors": (
        {"my_video_url": VIDEO_URL, "competitor_urls": "https://www.youtube.com/watch?v=rival"},
        {
            "contentGaps": ["Nobody covers budget grinders"],
            "successPatterns": ["Faces in the first frame"],
            "uniqueAngles": ["Compare against cafe prices"],
            "audienceInsights": ["Viewers ask about milk frothing"],
            "recommendations": [
                {"category": "Hooks", "suggestion": "Open with the final cup", "priority": "High"}
            ],
        },
    ),
    "repurpose": (
        {"content_url": "https://example.com/blog/cold-brew", "content_text": ""},
        {
            "keyTakeaways": ["Cold brew steeps for twelve hours"],
            "videoIdeas": [
                {
                    "title": "Cold Brew Myths",
                    "format": "Myth Busting",
                    "hook": "Cold brew is not iced coffee.",
                    "contentAngle": "The steeping time section",
                }
            ],
        },
    ),
    "accessibility": (
        {"short_content": "Three tips for better sleep in thirty seconds"},
        {
            "captions": [{"startTime": "0:00", "endTime": "0:04", "text": "Tip one: dim the lights."}],
            "targetLanguages": ["Spanish", "Hindi"],
            "accessibilityScore": 87.5,
            "recommendations": ["Raise caption contrast"],
        },
    ),
}


def _leaves(value):
    if isinstance(value, dict):
        for item in value.values():
            yield from _leaves(item)
    elif isinstance(value, list):
        for item in value:
            yield from _leaves(item)
    elif isinstance(value, (int, float)):
        yield format_score(value)
    else:
        yield value


@pytest.fixture
def client(make_config, dispatcher):
    return TestClient(create_app(config_manager=make_config(), dispatcher=dispatcher))


def test_every_page_has_a_case():
    assert set(CASES) == set(PAGES)


@pytest.mark.parametrize("slug", list(CASES))
def test_result_renders_every_field(slug, client, mock_create, reply_with):
    form, payload = CASES[slug]
    mock_create.side_effect = reply_with(payload)

    response = client.post(f"/{slug}", data=form)

    assert response.status_code == 200
    assert mock_create.call_count == 1
    assert mock_create.call_args.kwargs["response_model"] is PAGES[slug].capability.output_model
    for leaf in _leaves(payload):
        assert leaf in response.text, f"{slug}: {leaf!r} not rendered"


@pytest.mark.parametrize(
    "slug,field",
    [(slug, f.name) for slug, spec in PAGES.items() for f in spec.form.inputs if not f.optional],
)
def test_blank_required_field_skips_model(slug, field, client, mock_create):
    form, _ = CASES[slug]

    response = client.post(f"/{slug}", data={**form, field: ""})

    assert response.status_code == 200
    assert f'id="{field}-error"' in response.text
    mock_create.assert_not_called()


@pytest.mark.parametrize("slug", list(CASES))
def test_blank_form_skips_model(slug, client, mock_create):
    response = client.post(f"/{slug}", data={})

    assert response.status_code == 200
    mock_create.assert_not_called()


@pytest.mark.parametrize("slug", list(CASES))
def test_api_returns_camel_case_record(slug, client, mock_create, reply_with):
    form, payload = CASES[slug]
    mock_create.side_effect = reply_with(payload)
    data = PAGES[slug].form.validate_values(PAGES[slug].form.read(form), PAGES[slug].capability.input_model)[0]

    response = client.post(f"/api/{slug}", json=data.model_dump(by_alias=True, exclude_none=True))

    assert response.status_code == 200
    assert response.json() == payload
