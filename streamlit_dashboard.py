import html
import json
from datetime import datetime

import streamlit as st
import plotly.express as px

from bragging_rights.config import AVATARS_FOLDER, DEFAULT_AVATAR, DIFFICULTY_POINTS, get_leaderboard_api_url
from bragging_rights.utils import first_line
from bragging_rights.view import (
    ViewState,
    build_leaderboard_table,
    difficulty_breakdown,
    fetch_leaderboard,
    image_data_uri,
    load_leaderboard,
    rank_participants,
    recent_processed,
    resolve_avatar,
    tug_of_war_percentages,
)

# --- Page Configuration ---
st.set_page_config(
    page_title="Braggin' Rights Log",
    page_icon="🏆",
    layout="centered",
    initial_sidebar_state="collapsed"
)

# --- Design System ---
ACCENT_COLORS = {
    "primary": "#8B5CF6",       # Violet - card gradient start
    "secondary": "#EC4899",     # Pink - card gradient end
    "player1": "#3B82F6",       # Blue - left side of the tug of war
    "player2": "#EF4444",       # Red - right side of the tug of war
    "success": "#10B981",
    "muted": "#9CA3AF",
    "difficulty": {"Easy": "#10B981", "Medium": "#F59E0B", "Hard": "#EF4444"},
}

# --- Leaderboard Flourishes ---
RANK_ICONS = {
    1: {"icon": "👑", "color": "#FFD700"},
    2: {"icon": "🥈", "color": "#C0C0C0"},
    3: {"icon": "🥉", "color": "#CD7F32"},
}


def avatar_html(name):
    """
    Inline avatar <img> for a participant.
    Unknown names resolve to the default image; onerror swaps to it as well
    if the browser fails to render the inlined image.
    """
    default_uri = image_data_uri(AVATARS_FOLDER / DEFAULT_AVATAR)
    src = image_data_uri(resolve_avatar(name)) or default_uri
    return (
        f'<img src="{src}" alt="{html.escape(name)}" '
        f'onerror="this.onerror=null;this.src=\'{default_uri}\';" '
        f'style="width:80px;height:80px;border-radius:50%;border:4px solid #FFFFFF;margin-bottom:1rem;background:#FFFFFF;">'
    )


def generate_scorecards(ranking, scores):
    """Generate HTML scorecards (avatar, name, score) in rank order."""
    if not ranking:
        return "<p>No qualifying commits yet.</p>"

    card_style = (
        f"background:linear-gradient(135deg, #4F46E5 0%, {ACCENT_COLORS['primary']} 50%, {ACCENT_COLORS['secondary']} 100%);"
        "border-radius:12px;padding:1.5rem;display:flex;flex-direction:column;align-items:center;"
        "box-shadow:0 4px 20px rgba(0,0,0,0.25);color:#FFFFFF;"
    )

    cards = []
    for rank, name in enumerate(ranking, start=1):
        badge = RANK_ICONS.get(rank)
        badge_html = f'<div style="font-size:1.4rem;">{badge["icon"]}</div>' if badge else ""
        cards.append(
            f'<div style="{card_style}">{badge_html}{avatar_html(name)}'
            f'<div style="font-size:1.5rem;font-weight:700;">{html.escape(name)}</div>'
            f'<div style="font-size:3rem;font-weight:800;margin-top:0.5rem;">{scores[name]}</div></div>'
        )

    grid_style = "display:grid;grid-template-columns:repeat(auto-fit, minmax(200px, 1fr));gap:1rem;text-align:center;margin-bottom:2rem;"
    return f'<div style="{grid_style}">{"".join(cards)}</div>'


def generate_tug_of_war(p1_percent, p2_percent):
    """Two-segment proportion bar for a head-to-head leaderboard."""
    bar_style = "display:flex;height:2.5rem;border-radius:9999px;overflow:hidden;background:#374151;border:1px solid rgba(255,255,255,0.1);margin-bottom:2rem;"
    segment = "transition:width 0.7s;"
    return (
        f'<div style="{bar_style}">'
        f'<div style="{segment}width:{p1_percent:.2f}%;background:{ACCENT_COLORS["player1"]};"></div>'
        f'<div style="{segment}width:{p2_percent:.2f}%;background:{ACCENT_COLORS["player2"]};"></div>'
        f'</div>'
    )


def apply_plotly_style(fig):
    """Transparent backgrounds and neutral grid so charts follow the Streamlit theme."""
    grid_color = "rgba(128, 128, 128, 0.4)"
    fig.update_layout(
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        xaxis=dict(gridcolor=grid_color, showgrid=False, zeroline=False),
        yaxis=dict(gridcolor=grid_color, showgrid=True, zeroline=False, dtick=1),
        legend=dict(title_text="", bgcolor="rgba(0,0,0,0)", borderwidth=0),
        dragmode=False,  # Disable pan/zoom to prevent scroll hijacking on mobile
    )
    return fig


# --- State Rendering ---
def render_failure(error):
    st.error(f"Error: {error}")
    # Clicking reruns the script, which re-enters Loading and fetches again
    st.button("Retry", type="primary")


def render_debug_panel(data, scores, ranking):
    st.subheader("🐛 Debug Information")

    st.markdown("**Raw Scores Data:**")
    st.code(json.dumps(scores, indent=2), language="json")

    st.markdown("**All Participants Found:**")
    if not ranking:
        st.warning("No participants found!")
    for name in ranking:
        st.markdown(f"✓ {name} (Score: {scores[name]})")

    records = recent_processed(data)
    if records:
        label = "Recent Files Processed:" if "processedFiles" in data else "Recent Commits Processed:"
        st.markdown(f"**{label}**")
        for record in records:
            author = record.get("participant") or record.get("login") or record.get("author") or "Unknown"
            st.markdown(
                f"- `{record.get('sha', '')[:7]}` **{author}** · "
                f"{first_line(record.get('message', ''))} · {record.get('points', 0)} pts"
            )

    if data.get("debugInfo"):
        with st.expander("File trace", expanded=False):
            st.json(data["debugInfo"])


# --- Main App ---
def main():
    st.title("🏆 Braggin' Rights Log")

    api_url = get_leaderboard_api_url()
    status = st.empty()

    def show_state(model):
        if model.state is ViewState.LOADING:
            status.info("Loading leaderboard...")
        else:
            status.empty()

    view = load_leaderboard(lambda: fetch_leaderboard(api_url), on_change=show_state)

    if view.state is ViewState.FAILURE:
        render_failure(view.error)
        return

    data = view.data
    scores = data.get("scores") or {}
    details = data.get("details") or {}
    ranking = rank_participants(scores)

    if st.toggle("Show Debug Info", value=False):
        render_debug_panel(data, scores, ranking)
        st.markdown("---")

    # Scorecards
    st.html(generate_scorecards(ranking, scores))

    # Tug of war bar (only for a two-person leaderboard)
    split = tug_of_war_percentages(scores)
    if split is not None:
        st.html(generate_tug_of_war(*split))

    # Full leaderboard
    st.subheader("Full Leaderboard")
    df_table = build_leaderboard_table(scores, details)
    st.dataframe(
        df_table,
        hide_index=True,
        use_container_width=True,
        column_config={
            "Rank": st.column_config.NumberColumn("Rank", format="%d"),
            "Score": st.column_config.NumberColumn("Score", format="%d"),
            "Contributions": st.column_config.NumberColumn(
                "Files" if "processedFiles" in data else "Commits", format="%d"
            ),
        },
    )

    # Difficulty breakdown
    df_breakdown = difficulty_breakdown(details)
    if not df_breakdown.empty:
        st.subheader("Difficulty Breakdown")
        fig = px.bar(
            df_breakdown,
            x="Name",
            y="Count",
            color="Difficulty",
            barmode="stack",
            category_orders={"Name": ranking, "Difficulty": list(DIFFICULTY_POINTS)},
            color_discrete_map=ACCENT_COLORS["difficulty"],
        )
        st.plotly_chart(apply_plotly_style(fig), use_container_width=True, config={'displayModeBar': False, 'scrollZoom': False})

    st.caption(f"Last updated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")


if __name__ == "__main__":
    main()
