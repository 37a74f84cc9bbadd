"""Sign in / sign up against the hosted auth service."""

import os
import sys

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if ROOT_DIR not in sys.path:
    sys.path.append(ROOT_DIR)

import streamlit as st

from supabase_client.errors import StoreError
from ui.components.session import get_session_provider

st.set_page_config(page_title="Sign in — QuantHub", page_icon="🔑", layout="centered")
provider = get_session_provider()

if provider.signed_in:
    st.switch_page("overview.py")

st.title("Welcome to Quant Hub")
st.caption("Your AI-powered trading strategy platform")

sign_in_tab, sign_up_tab = st.tabs(["Sign in", "Sign up"])

with sign_in_tab:
    with st.form("sign_in_form"):
        email = st.text_input("Email address")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in", type="primary")
    if submitted:
        try:
            session = provider.sign_in(email.strip(), password)
        except StoreError as e:
            st.error(e.message)
        else:
            if session is not None:
                st.switch_page("overview.py")

with sign_up_tab:
    with st.form("sign_up_form"):
        new_email = st.text_input("Email address", key="signup_email")
        new_password = st.text_input("Create a password", type="password", key="signup_password")
        registered = st.form_submit_button("Sign up")
    if registered:
        try:
            session = provider.sign_up(new_email.strip(), new_password)
        except StoreError as e:
            st.error(e.message)
        else:
            if session is None:
                st.info("Check your email for the confirmation link.")
            else:
                st.switch_page("overview.py")
