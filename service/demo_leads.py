"""
Demo leads for the analysis modal.

One lead per analysis type plus a lead stored in the legacy deep-payload
shape. Seeded into the lead store at startup when LV_SEED_DEMO_LEADS is on.
"""

DEMO_LEADS = [
    {
        "lead_id": "demo-light",
        "username": "sunrise.bakery",
        "display_name": "Sunrise Bakery",
        "profile_picture_url": "https://cdn.example.com/avatars/sunrise.jpg",
        "bio_text": "Small-batch sourdough, baked daily.",
        "follower_count": 2340,
        "following_count": 310,
        "post_count": 128,
        "is_verified_account": False,
        "is_private_account": False,
        "is_business_account": True,
        "profile_url": "https://instagram.com/sunrise.bakery",
        "runs": [
            {
                "run_id": "run-light-1",
                "analysis_type": "light",
                "overall_score": 42,
                "niche_fit_score": 38,
                "engagement_score": 45,
                "summary_text": "Local bakery with steady engagement and a loyal neighborhood following.",
                "confidence_level": "medium",
                "created_at": "2026-09-02T10:15:00+00:00",
                "payloads": [],
            },
        ],
    },
    {
        "lead_id": "demo-deep",
        "username": "trailrunner.mia",
        "display_name": "Mia Torres",
        "profile_picture_url": "https://cdn.example.com/avatars/mia.jpg",
        "bio_text": "Ultra runner. Coach. Coffee.",
        "follower_count": 48200,
        "following_count": 812,
        "post_count": 604,
        "is_verified_account": True,
        "is_private_account": False,
        "is_business_account": False,
        "profile_url": "https://instagram.com/trailrunner.mia",
        "runs": [
            {
                "run_id": "run-deep-0",
                "analysis_type": "light",
                "overall_score": 61,
                "summary_text": "Fitness creator with an engaged audience.",
                "created_at": "2026-08-20T08:00:00+00:00",
                "payloads": [],
            },
            {
                "run_id": "run-deep-1",
                "analysis_type": "deep",
                "overall_score": 78,
                "niche_fit_score": 82,
                "engagement_score": 74,
                "summary_text": "Endurance coach whose audience buys training gear and coaching plans.",
                "confidence_level": "high",
                "created_at": "2026-09-14T16:40:00+00:00",
                "payloads": [
                    {
                        "analysis_data": {
                            "deep_summary": "Mia runs a coaching business on top of her content. "
                                            "Her audience is mid-career runners preparing for first ultras.",
                            "selling_points": [
                                "Sells her own coaching plans",
                                "Audience trusts her gear reviews",
                                "Posts race recaps weekly",
                            ],
                            "outreach_message": "Hi Mia, loved your recap of the Western States training block.",
                            "reasons": [
                                "High niche fit for endurance products",
                                "Consistent posting cadence",
                            ],
                            "audience_insights": "Mostly 28-45, North America, strong interest in trail gear.",
                            "engagement_breakdown": {
                                "avg_likes": 2100,
                                "avg_comments": 96,
                                "engagement_rate": 4.6,
                            },
                            "latest_posts": [
                                {"caption": "Week 12 of the build.", "likes": 2400, "comments": 110},
                                {"caption": "Gear I actually use.", "likes": 3100, "comments": 180},
                            ],
                            "personality_profile": {
                                "disc_profile": "DI",
                                "data_confidence": "high",
                                "content_authenticity": "human_authentic",
                                "behavior_patterns": [
                                    "Replies to most comments within a day",
                                    "Shares training data openly",
                                ],
                                "communication_style": "Direct and encouraging, with plenty of specifics.",
                                "motivation_drivers": ["Community", "Mastery"],
                            },
                        }
                    }
                ],
            },
        ],
    },
    {
        "lead_id": "demo-xray",
        "username": "studio.nova",
        "display_name": "Studio Nova",
        "profile_picture_url": "https://cdn.example.com/avatars/nova.jpg",
        "bio_text": "Brand design for founders.",
        "follower_count": 15800,
        "following_count": 420,
        "post_count": 233,
        "is_verified_account": False,
        "is_private_account": False,
        "is_business_account": True,
        "profile_url": "https://instagram.com/studio.nova",
        "runs": [
            {
                "run_id": "run-xray-1",
                "analysis_type": "xray",
                "overall_score": 92,
                "niche_fit_score": 95,
                "engagement_score": 88,
                "summary_text": "Design studio selling to early-stage founders; strong buying signals.",
                "confidence_level": "high",
                "created_at": "2026-10-01T09:05:00+00:00",
                "payloads": [
                    {
                        "analysis_data": {
                            "copywriter_profile": {
                                "demographics": "Founders, 25-40, seed to Series A",
                                "psychographics": "Values craft and speed",
                                "pain_points": ["Inconsistent brand", "No in-house designer"],
                                "dreams_desires": ["Look like a category leader"],
                            },
                            "commercial_intelligence": {
                                "budget_tier": "mid_market",
                                "buying_stage": "active_evaluation",
                                "decision_role": "economic_buyer",
                                "objections": ["Timeline", "Price"],
                            },
                            "persuasion_strategy": {
                                "primary_angle": "speed_to_launch",
                                "hook_style": "case_study",
                                "communication_style": "Concise, visual, proof-first",
                                "proof_elements": ["Before/after rebrands", "Founder testimonials"],
                            },
                            "personality_profile": {
                                "disc_profile": "CD",
                                "data_confidence": "medium",
                                "content_authenticity": "ai_assisted",
                            },
                        }
                    }
                ],
            },
        ],
    },
    {
        "lead_id": "demo-legacy",
        "username": "oldschool.coffee",
        "display_name": "Old School Coffee",
        "follower_count": 870,
        "following_count": 190,
        "post_count": 54,
        "runs": [
            {
                "run_id": "run-legacy-1",
                "analysis_type": "deep",
                "overall_score": 55,
                "summary_text": "Neighborhood roaster.",
                "created_at": "2025-11-30T12:00:00+00:00",
                "deep_payload": {
                    "deep_summary": "Roaster with a small but loyal audience; wholesale opportunity.",
                    "selling_points": ["Roasts in-house"],
                },
            },
        ],
    },
]


def seed(store) -> int:
    """Load the demo leads into ``store``; returns the number loaded."""
    for row in DEMO_LEADS:
        store.put(row)
    return len(DEMO_LEADS)
