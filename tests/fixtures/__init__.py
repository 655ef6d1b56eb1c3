"""
Test fixtures for tableqa.

Contains sample data for testing:
- people.csv: Small CSV with quoted fields (embedded comma, escaped quotes)
- table_qa_response.json: Successful table QA backend response
"""
