"""
Utility modules for the Streamlit frontend.

This package contains:
- api_client: Backend API communication
- state: Browser state and session id kept in st.session_state
"""
