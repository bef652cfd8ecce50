"""
Streamlit frontend — Bixo recruitment marketplace
"""
import logging

import pandas as pd
import plotly.express as px
import streamlit as st

from bixo.core.api import ApiClient
from bixo.core.auth import AuthService
from bixo.core.capabilities import CAPABILITY_ORDER, derive_capabilities, has_capabilities
from bixo.core.config import get_settings
from bixo.models.schemas import (
    Availability, CandidateProfileUpdate, HiringLocation, SeniorityLevel, UserType,
)
from bixo.services import admin, candidates, companies, recommendations, shortlists

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)

st.set_page_config(
    page_title="Bixo",
    page_icon="🧭",
    layout="wide",
    initial_sidebar_state="expanded",
)


def get_auth() -> AuthService:
    """One client + auth service per browser session."""
    if "auth" not in st.session_state:
        auth = AuthService(ApiClient())
        auth.check_auth()
        st.session_state.auth = auth
    return st.session_state.auth


def label(value) -> str:
    return value.name.replace("_", " ").title() if value is not None else "—"


def show(res, success_msg: str | None = None) -> bool:
    """Render an ApiResponse failure inline; returns success."""
    if not res.success:
        st.error(f"⚠️ {res.error}")
        return False
    if success_msg:
        st.success(success_msg)
    return True


auth = get_auth()
api = auth.api
user = auth.user

# ── Sidebar ───────────────────────────────────────────────────────────────────
PAGES = {
    None: ["🔑 Sign in", "✍️ Register", "💬 Recommendation link"],
    UserType.CANDIDATE: ["🏠 Dashboard", "👤 Profile", "💬 Recommendation link"],
    UserType.COMPANY: ["🔍 Talent", "📋 Shortlists"],
    UserType.ADMIN: ["👥 Candidates", "🏢 Companies", "📋 Review shortlists", "⭐ Recommendations"],
}

with st.sidebar:
    st.title("🧭 Bixo")
    st.caption(settings.API_URL)
    st.markdown("---")
    page = st.radio("Navigate", PAGES[user.user_type if user else None], label_visibility="collapsed")
    st.markdown("---")
    if user:
        st.markdown(f"Signed in as **{user.email}**")
        if st.button("Sign out"):
            auth.logout()
            st.rerun()


# ── SIGN IN ───────────────────────────────────────────────────────────────────
if page == "🔑 Sign in":
    st.header("🔑 Sign in")
    with st.form("login"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        if st.form_submit_button("Sign in", type="primary"):
            result = auth.login(email, password)
            if result.success:
                st.rerun()
            st.error(result.error)


# ── REGISTER ──────────────────────────────────────────────────────────────────
elif page == "✍️ Register":
    st.header("✍️ Create an account")
    tab_candidate, tab_company = st.tabs(["I'm a candidate", "I'm hiring"])

    with tab_candidate:
        with st.form("register_candidate"):
            first_name = st.text_input("First name*")
            last_name = st.text_input("Last name*")
            email = st.text_input("Email*")
            password = st.text_input("Password*", type="password")
            if st.form_submit_button("Register", type="primary"):
                result = auth.register_candidate(email, password, first_name, last_name)
                if result.success:
                    st.rerun()
                st.error(result.error)

    with tab_company:
        with st.form("register_company"):
            company_name = st.text_input("Company name*")
            industry = st.text_input("Industry")
            email = st.text_input("Work email*")
            password = st.text_input("Password*", type="password")
            if st.form_submit_button("Register", type="primary"):
                result = auth.register_company(email, password, company_name, industry)
                if result.success:
                    st.rerun()
                st.error(result.error)


# ── RECOMMENDATION LINK ───────────────────────────────────────────────────────
elif page == "💬 Recommendation link":
    st.header("💬 Write a recommendation")
    token = st.text_input("Recommendation token", value=st.query_params.get("token", ""))
    if token:
        res = recommendations.get_form(api, token)
        if show(res):
            form = res.data
            if form.is_already_submitted:
                st.info("This recommendation has already been submitted. Thank you!")
            else:
                st.markdown(f"Recommending **{form.candidate_name or 'the candidate'}**")
                with st.form("recommendation"):
                    content = st.text_area("Recommendation*", height=200)
                    st.caption(f"{recommendations.word_count(content)} words")
                    role = st.text_input("Your role")
                    company = st.text_input("Your company")
                    if st.form_submit_button("Submit", type="primary"):
                        show(recommendations.submit(api, token, content, role, company),
                             "✅ Thanks, your recommendation was submitted.")


# ── CANDIDATE DASHBOARD ───────────────────────────────────────────────────────
elif page == "🏠 Dashboard":
    st.header("🏠 Dashboard")
    res = candidates.get_profile(api)
    if show(res):
        profile = res.data
        m1, m2, m3 = st.columns(3)
        m1.metric("Profile views", profile.profile_views_count)
        m2.metric("Recommendations", profile.recommendations_count)
        m3.metric("Availability", label(profile.availability))

        caps = derive_capabilities(profile.skills)
        if has_capabilities(caps):
            df = pd.DataFrame([
                {"Capability": c, "Skills": len(caps[c])} for c in CAPABILITY_ORDER if c in caps
            ])
            fig = px.bar(df, x="Capability", y="Skills", title="Capabilities", color="Skills",
                         color_continuous_scale="Blues")
            st.plotly_chart(fig, use_container_width=True)
            for c in CAPABILITY_ORDER:
                if c in caps:
                    st.markdown(f"**{c}:** " + " ".join(f"`{s}`" for s in caps[c]))
        else:
            st.info("Upload your CV to get your skills extracted.")

    st.subheader("Notifications")
    res = candidates.get_notifications(api)
    if show(res):
        for n in res.data or []:
            st.markdown(f"{'' if n.is_read else '🔵 '}**{n.title}** — {n.message or ''}")
        if not res.data:
            st.caption("Nothing new.")


# ── CANDIDATE PROFILE ─────────────────────────────────────────────────────────
elif page == "👤 Profile":
    st.header("👤 Profile")
    res = candidates.get_profile(api)
    if show(res):
        profile = res.data
        with st.form("profile"):
            first_name = st.text_input("First name", profile.first_name or "")
            last_name = st.text_input("Last name", profile.last_name or "")
            desired_role = st.text_input("Desired role", profile.desired_role or "")
            linked_in = st.text_input("LinkedIn URL", profile.linked_in_url or "")
            availability = st.selectbox("Availability", list(Availability),
                                        index=list(Availability).index(profile.availability),
                                        format_func=label)
            visible = st.checkbox("Visible to companies", profile.profile_visible)
            if st.form_submit_button("Save", type="primary"):
                update = CandidateProfileUpdate(
                    first_name=first_name or None,
                    last_name=last_name or None,
                    desired_role=desired_role or None,
                    linked_in_url=linked_in or None,
                    availability=availability,
                    profile_visible=visible,
                )
                show(candidates.update_profile(api, update), "✅ Profile saved")

        f = st.file_uploader("CV (PDF / DOC / DOCX)", type=["pdf", "doc", "docx"])
        if f and st.button("📤 Upload CV"):
            with st.spinner("Uploading..."):
                show(candidates.upload_cv(api, f.name, f.getvalue(), f.type), "✅ CV uploaded")

    st.subheader("Recommendations")
    res = candidates.list_my_recommendations(api)
    if show(res):
        for r in res.data or []:
            with st.expander(f"{r.recommender_name or 'Recommender'} — {r.relationship or ''}"):
                st.write(r.content or "_Not submitted yet_")
                col1, col2 = st.columns(2)
                if r.is_submitted and not r.is_approved_by_candidate:
                    if col1.button("Approve", key=f"approve_{r.id}"):
                        if show(candidates.approve_my_recommendation(api, r.id)):
                            st.rerun()
                if col2.button("Delete", key=f"delete_{r.id}"):
                    if show(candidates.delete_my_recommendation(api, r.id)):
                        st.rerun()


# ── COMPANY TALENT ────────────────────────────────────────────────────────────
elif page == "🔍 Talent":
    st.header("🔍 Find talent")
    col1, col2, col3, col4 = st.columns([3, 1, 1, 1])
    with col1:
        skills = st.text_input("Skills", placeholder="python, react")
    with col2:
        seniority = st.selectbox("Seniority", [None, *SeniorityLevel], format_func=label)
    with col3:
        availability = st.selectbox("Availability", [None, *Availability], format_func=label)
    with col4:
        page_no = st.number_input("Page", min_value=1, value=1, step=1)

    res = companies.search_talent(api, page=int(page_no), skills=skills,
                                  seniority=seniority, availability=availability)
    if show(res):
        result = res.data
        st.caption(f"{result.total_count} candidates · page {result.page} of {max(result.total_pages, 1)}")
        for c in result.candidates:
            name = " ".join(p for p in (c.first_name, c.last_name) if p) or "Anonymous"
            with st.expander(f"**{name}** — {c.desired_role or '—'} · match {c.match_score:.0%}"):
                st.markdown(f"{label(c.seniority_estimate)} · {label(c.availability)} · "
                            f"{c.location_display_text or c.location_preference or '—'}")
                if c.top_skills:
                    st.markdown(" ".join(f"`{s}`" for s in c.top_skills))
                if st.button("★ Unsave" if c.is_saved else "☆ Save", key=f"save_{c.candidate_id}"):
                    if show(companies.toggle_saved(api, c.candidate_id, c.is_saved)):
                        st.rerun()
                with st.form(f"msg_{c.candidate_id}"):
                    subject = st.text_input("Subject")
                    content = st.text_area("Message")
                    if st.form_submit_button("Send message"):
                        sent = companies.send_message(api, c.candidate_id, content, subject)
                        if show(sent, "✅ Message sent") and sent.data and sent.data.messages_remaining is not None:
                            st.caption(f"{sent.data.messages_remaining} messages remaining")


# ── COMPANY SHORTLISTS ────────────────────────────────────────────────────────
elif page == "📋 Shortlists":
    st.header("📋 Shortlists")

    with st.expander("➕ Request a shortlist", expanded=False):
        with st.form("shortlist_request"):
            role_title = st.text_input("Role title*", placeholder="Senior Backend Engineer")
            tech_stack = st.text_input("Tech stack (comma-separated)", placeholder="python, postgres")
            seniority = st.selectbox("Seniority", [None, *SeniorityLevel], format_func=label)
            is_remote = st.checkbox("Remote", value=True)
            city = st.text_input("City")
            country = st.text_input("Country")
            notes = st.text_area("Notes")
            if st.form_submit_button("Submit request", type="primary"):
                location = HiringLocation(is_remote=is_remote, city=city or None, country=country or None)
                res = shortlists.request_shortlist(api, role_title, tech_stack, seniority=seniority,
                                                   hiring_location=location, notes=notes)
                if show(res, "✅ Request submitted"):
                    st.rerun()

    res = shortlists.list_shortlists(api)
    if show(res):
        items = res.data or []
        if not items:
            st.info("No shortlists yet.")
        for s in items:
            with st.expander(f"**{s.role_title}** — {label(s.status)} · {s.candidates_count} candidates"):
                if s.tech_stack_required:
                    st.markdown(" ".join(f"`{t}`" for t in s.tech_stack_required))
                if st.button("Show candidates", key=f"detail_{s.id}"):
                    detail = shortlists.get_shortlist(api, s.id)
                    if show(detail):
                        df = pd.DataFrame([{
                            "Rank": c.rank,
                            "Name": " ".join(p for p in (c.first_name, c.last_name) if p) or "—",
                            "Role": c.desired_role or "—",
                            "Match": f"{c.match_score:.0%}",
                            "Why": c.match_reason or "",
                        } for c in detail.data.candidates])
                        st.dataframe(df, use_container_width=True)


# ── ADMIN: CANDIDATES ─────────────────────────────────────────────────────────
elif page == "👥 Candidates":
    st.header("👥 Candidates")
    col1, col2, col3 = st.columns([3, 1, 1])
    search = col1.text_input("Search")
    visibility = col2.selectbox("Visibility", ["all", "visible", "hidden"])
    page_no = col3.number_input("Page", min_value=1, value=1, step=1)

    res = admin.list_candidates(api, page=int(page_no), search=search,
                                visible=None if visibility == "all" else visibility == "visible")
    if show(res):
        result = res.data
        st.caption(f"{result.total_count} total · {admin.total_pages(result.total_count, result.page_size)} pages")
        for c in result.items:
            name = " ".join(p for p in (c.first_name, c.last_name) if p) or c.email
            cols = st.columns([3, 2, 1, 1, 1])
            cols[0].markdown(f"**{name}**  \n{c.email}")
            cols[1].write(c.desired_role or "—")
            cols[2].write(label(c.seniority_estimate))
            cols[3].write(label(c.availability))
            if cols[4].button("Hide" if c.profile_visible else "Show", key=f"vis_{c.id}"):
                if show(admin.set_candidate_visibility(api, c.id, not c.profile_visible)):
                    st.rerun()


# ── ADMIN: COMPANIES ──────────────────────────────────────────────────────────
elif page == "🏢 Companies":
    st.header("🏢 Companies")
    col1, col2 = st.columns([3, 1])
    search = col1.text_input("Search")
    page_no = col2.number_input("Page", min_value=1, value=1, step=1)

    res = admin.list_companies(api, page=int(page_no), search=search)
    if show(res):
        result = res.data
        st.caption(f"{result.total_count} total · {admin.total_pages(result.total_count, result.page_size)} pages")
        for c in result.items:
            with st.expander(f"**{c.company_name or c.email}** — {label(c.subscription_tier)}"):
                with st.form(f"messages_{c.id}"):
                    messages = st.number_input("Messages remaining", min_value=0, value=c.messages_remaining)
                    if st.form_submit_button("Update"):
                        show(admin.set_company_messages(api, c.id, int(messages)), "✅ Updated")


# ── ADMIN: SHORTLISTS ─────────────────────────────────────────────────────────
elif page == "📋 Review shortlists":
    st.header("📋 Shortlists")
    status = st.selectbox("Status", ["all", "pending", "processing", "completed", "cancelled"])
    res = admin.list_shortlists(api, status=status)
    if show(res):
        items = res.data or []
        if items:
            fig = px.pie(pd.DataFrame([{"Status": s.status} for s in items]), names="Status",
                         title="Shortlists by status")
            st.plotly_chart(fig, use_container_width=True)
        for s in items:
            with st.expander(f"**{s.role_title}** — {s.company_name} · {s.status}"):
                if s.tech_stack_required:
                    st.markdown(" ".join(f"`{t}`" for t in s.tech_stack_required))
                if s.additional_notes:
                    st.info(s.additional_notes)
                new_status = st.selectbox("Set status", ["Pending", "Processing", "Completed", "Cancelled"],
                                          key=f"status_{s.id}")
                if st.button("Update", key=f"update_{s.id}"):
                    if show(admin.update_shortlist_status(api, s.id, new_status)):
                        st.rerun()


# ── ADMIN: RECOMMENDATIONS ────────────────────────────────────────────────────
elif page == "⭐ Recommendations":
    st.header("⭐ Recommendations awaiting review")
    res = admin.list_recommendations(api)
    if show(res):
        if not res.data:
            st.info("Nothing to review.")
        for r in res.data or []:
            with st.expander(f"**{r.candidate_name or '—'}** ← {r.recommender_name or '—'} ({r.relationship or '—'})"):
                st.write(r.content or "")
                col1, col2 = st.columns([1, 3])
                if col1.button("✅ Approve", key=f"approve_{r.id}"):
                    if show(admin.approve_recommendation(api, r.id)):
                        st.rerun()
                reason = col2.selectbox("Rejection reason", admin.REJECTION_REASONS, key=f"reason_{r.id}")
                if col2.button("❌ Reject", key=f"reject_{r.id}"):
                    if show(admin.reject_recommendation(api, r.id, reason)):
                        st.rerun()
