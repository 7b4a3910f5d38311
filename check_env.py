#!/usr/bin/env python3
"""Helper script to check and create the .env file for TreeRoute."""

from pathlib import Path
import os

SECRET_KEYS = ("TREEROUTE_SUPABASE_KEY", "TREEROUTE_ORS_API_KEY")

TEMPLATE = """# Supabase (leave empty to use in-memory demo assets)
TREEROUTE_SUPABASE_URL=https://your-project-id.supabase.co
TREEROUTE_SUPABASE_KEY=your-service-role-key-here

# Route planning: nearest_neighbor or openrouteservice
TREEROUTE_ROUTE_STRATEGY=nearest_neighbor

# OpenRouteService optimization (required for the openrouteservice strategy)
TREEROUTE_ORS_ENDPOINT=https://api.openrouteservice.org/optimization
TREEROUTE_ORS_API_KEY=your-openrouteservice-key-here
TREEROUTE_ORS_TIMEOUT_SECONDS=30

# Depot used as the start and end of every route
TREEROUTE_DEPOT_LONGITUDE=5.453487298268298
TREEROUTE_DEPOT_LATITUDE=51.45081456926727
"""


def _mask(value: str) -> str:
    if len(value) > 20:
        return value[:8] + "..." + value[-4:]
    return "***"


def main():
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("TreeRoute Environment Checker")
    print("=" * 60)
    print()

    if not env_file.exists():
        print(f"❌ .env file NOT found at: {env_file}")
        print("Creating template .env file...")
        env_file.write_text(TEMPLATE, encoding="utf-8")
        print(f"✅ Created .env file at: {env_file}")
        print("⚠️  Please edit .env and add your credentials!")
        return

    print(f"✅ Found .env file at: {env_file}")
    print("-" * 60)
    for line in env_file.read_text(encoding="utf-8").splitlines():
        name, sep, value = line.partition("=")
        if sep and name.strip() in SECRET_KEYS and value.strip():
            print(f"{name}={_mask(value.strip())}")
        else:
            print(line)
    print("-" * 60)
    print()

    for name in ("TREEROUTE_SUPABASE_URL", *SECRET_KEYS):
        if os.getenv(name):
            print(f"✅ {name} set in environment")
        else:
            print(f"ℹ️  {name} not set in environment (the .env file is used instead)")
    print()

    try:
        import sys
        sys.path.insert(0, str(project_root / "src"))
        from treeroute.config import settings
    except Exception as e:
        print(f"❌ Error loading config: {e}")
        print("Make sure you're running this from the project root directory")
        return

    print(f"Route strategy: {settings.route_strategy}")
    print(f"Supabase configured: {bool(settings.supabase_url and settings.supabase_key)}")
    print(f"OpenRouteService key configured: {bool(settings.ors_api_key)}")
    if settings.route_strategy == "openrouteservice" and not settings.ors_api_key:
        print("❌ ERROR: openrouteservice strategy selected but TREEROUTE_ORS_API_KEY is missing")


if __name__ == "__main__":
    main()
