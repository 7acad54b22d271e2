"""
Evaluation metrics for tagcore components
"""
