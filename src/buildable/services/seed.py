"""Sample data for a fresh showcase database."""

from __future__ import annotations

import random
from dataclasses import dataclass

import structlog

from buildable.models.requests import CategoryCreate, ProjectCreate, RatingCreate, UserCreate
from buildable.services.storage import ShowcaseStore

logger = structlog.get_logger()

SAMPLE_CATEGORIES = [
    {"name": "Web Apps", "color": "#3b82f6", "icon": "🌐"},
    {"name": "Mobile Apps", "color": "#10b981", "icon": "📱"},
    {"name": "AI/ML", "color": "#8b5cf6", "icon": "🤖"},
    {"name": "Developer Tools", "color": "#f59e0b", "icon": "🛠️"},
    {"name": "Games", "color": "#ef4444", "icon": "🎮"},
    {"name": "APIs", "color": "#06b6d4", "icon": "🔌"},
    {"name": "Open Source", "color": "#84cc16", "icon": "📦"},
    {"name": "Design Tools", "color": "#ec4899", "icon": "🎨"},
]

SAMPLE_USERS = [
    {
        "name": "Alex Rodriguez",
        "email": "alex@example.com",
        "bio": "Full-stack developer passionate about building amazing user experiences.",
        "github": "alexrodriguez",
        "website": "https://alexdev.com",
        "twitter": "alexrodriguez_dev",
    },
    {
        "name": "Sarah Chen",
        "email": "sarah@example.com",
        "bio": "Frontend developer & UI/UX designer. Love creating beautiful interfaces.",
        "github": "sarahchen",
        "website": "https://sarahchen.design",
    },
    {
        "name": "Maya Patel",
        "email": "maya@example.com",
        "bio": "Mobile app developer specializing in React Native and Flutter.",
        "github": "mayapatel",
        "twitter": "maya_codes",
    },
    {
        "name": "Jordan Okafor",
        "email": "jordan@example.com",
        "bio": "Backend engineer who enjoys APIs, queues and databases.",
        "github": "jokafor",
    },
    {
        "name": "Lena Fischer",
        "email": "lena@example.com",
        "bio": "Game developer and pixel artist.",
        "github": "lenafischer",
    },
]

SAMPLE_PROJECTS = [
    {
        "title": "TaskFlow - Project Management App",
        "description": "A modern project management application built with React and Node.js. "
        "Features real-time collaboration, task tracking, and team analytics.",
        "category": "web-app",
        "images": ["https://images.unsplash.com/photo-1611224923853-80b023f02d71?w=600&h=400&fit=crop"],
        "demo_url": "https://taskflow-demo.com",
        "github_url": "https://github.com/user/taskflow",
        "tech_stack": ["React", "Node.js", "PostgreSQL", "Socket.io", "TypeScript"],
        "featured": True,
        "categories": ["Web Apps", "Developer Tools"],
    },
    {
        "title": "WeatherWise Mobile App",
        "description": "Beautiful weather app with detailed forecasts, weather maps, and "
        "location-based alerts. Built with React Native.",
        "category": "mobile-app",
        "images": ["https://images.unsplash.com/photo-1504608524841-42fe6f032b4b?w=600&h=400&fit=crop"],
        "demo_url": "https://weatherwise-app.com",
        "github_url": "https://github.com/user/weatherwise",
        "tech_stack": ["React Native", "Expo", "Weather API", "Redux"],
        "categories": ["Mobile Apps"],
    },
    {
        "title": "AI Code Assistant",
        "description": "An intelligent code completion and review tool powered by machine "
        "learning. Helps developers write better code faster.",
        "category": "ai-ml",
        "images": ["https://images.unsplash.com/photo-1555949963-aa79dcee981c?w=600&h=400&fit=crop"],
        "github_url": "https://github.com/user/ai-code-assistant",
        "tech_stack": ["Python", "TensorFlow", "FastAPI", "Docker"],
        "featured": True,
        "categories": ["AI/ML", "Developer Tools"],
    },
    {
        "title": "RetroGame Engine",
        "description": "A lightweight 2D game engine for creating retro-style games. "
        "Built with JavaScript and WebGL.",
        "category": "game",
        "images": ["https://images.unsplash.com/photo-1550745165-9bc0b252726f?w=600&h=400&fit=crop"],
        "demo_url": "https://retrogame-engine.com",
        "github_url": "https://github.com/user/retrogame-engine",
        "tech_stack": ["JavaScript", "WebGL", "Canvas API"],
        "categories": ["Games", "Open Source"],
    },
    {
        "title": "DesignSync - Figma Plugin",
        "description": "A Figma plugin that automatically syncs design tokens with your "
        "codebase. Streamlines the design-to-development workflow.",
        "category": "tool",
        "images": ["https://images.unsplash.com/photo-1541462608143-67571c6738dd?w=600&h=400&fit=crop"],
        "github_url": "https://github.com/user/designsync",
        "tech_stack": ["TypeScript", "Figma API", "Node.js"],
        "categories": ["Design Tools", "Developer Tools"],
    },
    {
        "title": "GraphQL Analytics API",
        "description": "A powerful GraphQL API for analytics and reporting. Features real-time "
        "data aggregation and custom dashboard creation.",
        "category": "library",
        "images": ["https://images.unsplash.com/photo-1551288049-bebda4e38f71?w=600&h=400&fit=crop"],
        "demo_url": "https://graphql-analytics.com",
        "github_url": "https://github.com/user/graphql-analytics",
        "tech_stack": ["GraphQL", "Node.js", "PostgreSQL", "Redis"],
        "featured": True,
        "categories": ["APIs", "Developer Tools"],
    },
]

SAMPLE_COMMENT = "Great project! Really well executed."


@dataclass
class SeedSummary:
    categories: int = 0
    users: int = 0
    projects: int = 0
    ratings: int = 0


async def seed_store(store: ShowcaseStore, seed: int = 42) -> SeedSummary:
    """Populate an empty store with sample categories, developers, projects and ratings.

    Projects are assigned to developers round-robin. Every other developer
    rates each project with probability 0.8, never their own.

    Args:
        store: Store with tables already created.
        seed: Random seed for reproducible ratings.

    Returns:
        Counts of created rows.
    """
    rng = random.Random(seed)
    summary = SeedSummary()

    for category in SAMPLE_CATEGORIES:
        await store.categories.create(CategoryCreate(**category))
        summary.categories += 1

    users = []
    for user in SAMPLE_USERS:
        users.append(await store.users.create(UserCreate(**user)))
        summary.users += 1

    for i, project_data in enumerate(SAMPLE_PROJECTS):
        author = users[i % len(users)]
        project = await store.projects.create(author.id, ProjectCreate(**project_data))
        summary.projects += 1
        logger.debug("seeded_project", title=project.title, author=author.name)

        for rater in users:
            if rater.id == author.id or rng.random() > 0.8:
                continue
            comment = SAMPLE_COMMENT if rng.random() > 0.5 else None
            await store.ratings.create(
                rater.id,
                project.id,
                RatingCreate(rating=rng.randint(1, 5), comment=comment),
            )
            summary.ratings += 1

    logger.info(
        "seed_complete",
        categories=summary.categories,
        users=summary.users,
        projects=summary.projects,
        ratings=summary.ratings,
    )
    return summary
