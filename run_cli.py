"""
Run the Recip.ez bar assistant CLI.

Usage:
    python run_cli.py [COMMAND] [OPTIONS]

Commands:
    inventory  add | list | remove ingredients in your bar
    recipes    add | list | show | remove saved recipes
    chat       Interactive session with the AI recipe assistant
    ask        One-shot request, e.g. "Give me 2 margarita cocktails"
    status     Show configuration and store counts

Examples:
    python run_cli.py inventory add "Hendrick's Gin" -c spirit -q 700
    python run_cli.py ask "suggest a gin cocktail" --save
    python run_cli.py chat

Environment variables (all optional):
    OPENAI_API_KEY   Completion API key; without it every answer comes from
                     the built-in fallback recipes and replies
    OPENAI_BASE_URL  OpenAI-compatible API base URL (default: https://api.openai.com/v1)
    OPENAI_MODEL     Model name (default: gpt-4o-mini)
    OPENAI_TIMEOUT   Request timeout in seconds (default: 30)
    DB_PATH          SQLite database file path (default: recipez.db)
    LOG_LEVEL        Logging level (default: WARNING)
"""

import sys
from pathlib import Path

# Ensure src/ is importable
sys.path.insert(0, str(Path(__file__).parent / "src"))

from adapters.cli.main import app

if __name__ == "__main__":
    app()
