"""Streamlit entrypoint for the Payday Planner: ``streamlit run streamlit_app.py``."""

from app import main

main()
