"""Post-generation run and deployment instructions."""

from __future__ import annotations

from typing import Optional

from .config import DEPLOYMENT_OPTIONS, DeploymentTarget, ProjectChoices
from .prompts import Prompter
from .utils import print_info, print_panel

DEPLOYMENT_STEPS: dict[DeploymentTarget, list[str]] = {
    DeploymentTarget.HEROKU: [
        "Make sure you have the Heroku CLI installed.",
        "Login to your Heroku account: 'heroku login'",
        "Create a new Heroku app: 'heroku create <app-name>'",
        "Push your code to Heroku: 'git push heroku main'",
        "Open your app: 'heroku open'",
    ],
    DeploymentTarget.RENDER: [
        "Create a Render account at https://render.com",
        "Link your GitHub repository to Render",
        "Deploy your app using the Render dashboard",
        "Follow the Render documentation for setup and environment variables",
    ],
    DeploymentTarget.DIGITALOCEAN: [
        "Create an account on DigitalOcean: https://www.digitalocean.com",
        "Set up a Droplet or App Platform for your app.",
        "Push your code to your server or use the App Platform deployment guide.",
    ],
}


def run_instructions(choices: ProjectChoices) -> str:
    """Build the "how to run it" text for a finished project."""
    lines = [
        "Frontend:",
        "  - Navigate to the frontend folder: 'cd frontend'",
        "  - Start the frontend with 'npm run dev' (use 'yarn dev' if you prefer Yarn)",
    ]
    if choices.backend is not None:
        lines += [
            "",
            "Backend:",
            "  - Navigate to the backend folder: 'cd backend'",
            "  - Start the backend server with 'node server.js' (or use nodemon for auto-reloading)",
            "",
            "Ensure both the frontend and backend are running simultaneously "
            "for a full-stack experience.",
        ]

    notes = []
    if choices.database_setup:
        notes.append("Configure the database connection settings in backend/.env.")
    if choices.tailwind:
        notes.append("TailwindCSS has been set up and is ready for styling.")
    if notes:
        lines += ["", "Additional notes:"] + [f"  - {note}" for note in notes]
    return "\n".join(lines)


def deployment_instructions(target: DeploymentTarget) -> str:
    return "\n".join(
        f"{number}. {step}" for number, step in enumerate(DEPLOYMENT_STEPS[target], start=1)
    )


def print_run_instructions(choices: ProjectChoices) -> None:
    print_panel(run_instructions(choices), title="Project Setup Complete!", style="green")


def ask_deployment(prompter: Prompter) -> Optional[DeploymentTarget]:
    """Offer the deployment menu and print the chosen platform's steps.

    An invalid selection prints nothing; the explicit "skip" option says so.
    """
    options = list(DEPLOYMENT_OPTIONS)
    index = prompter.select(
        list(DEPLOYMENT_OPTIONS.values()), "Would you like to deploy your app?"
    )
    if not 0 <= index < len(options):
        return None

    target = options[index]
    if target is None:
        print_info("Skipping deployment.")
        return None

    label = DEPLOYMENT_OPTIONS[target]
    print_info(f"Preparing to deploy on {label}...")
    print_panel(deployment_instructions(target), title=f"Deploy on {label}")
    return target
