"""Static metadata describing QuizHall."""

APP_NAME = "QuizHall"
APP_VERSION = "0.1.0"
APP_ABOUT_TEXT = (
    "QuizHall is a small multi-user quiz platform. Organizers author a quiz and share "
    "its join code, participants answer the questions one by one, and the organizer "
    "follows the scoreboard and moderates who may join."
)
