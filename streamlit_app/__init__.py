"""Streamlit frontend for FoodieFrame."""
