from models.enums import Category


def format_amount(value: float) -> str:
    """2.0 -> '2', 2.5 -> '2.5'"""
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def goal_updated_message(category: Category, goal: float) -> str:
    return f"Goal for {category.value} updated to {format_amount(goal)} {category.unit}."


def progress_logged_message(category: Category, amount: float) -> str:
    return f"Logged {format_amount(amount)} {category.unit} for {category.value}!"


def invalid_number_message() -> str:
    return "Please enter a valid positive number."


def mindset_message(is100: bool) -> str:
    if is100:
        return "Mindset: BELIEVE 100% affirmed!"
    return "Mindset status reset."


def social_check_message(done: bool) -> str:
    if done:
        return "Social goal accomplished! Made someone smile!"
    return "Social goal unchecked."


def daily_reset_message() -> str:
    return "Daily progress reset! New day, new opportunities!"


def save_failed_message(error: Exception) -> str:
    return f"Save failed: {error}"


def database_error_message(error: Exception) -> str:
    return f"Database Error: {error}"


def auth_required_message() -> str:
    return "Authentication required to save progress."


def signed_out_message() -> str:
    return "Successfully logged out."


def trend_arrow(delta: int) -> str:
    if delta > 0:
        return "▲"
    if delta < 0:
        return "▼"
    return "■"


def summary_message(summary: dict) -> str:
    # summary — словарь из ui.charts.build_summary
    delta = summary["delta"]
    sign = "+" if delta > 0 else ""
    return (
        f"{summary['currentLabel']}: {summary['currentAvg']}%\n"
        f"{summary['previousLabel']}: {summary['previousAvg']}%\n"
        f"Change: {trend_arrow(delta)} {sign}{delta}%"
    )
