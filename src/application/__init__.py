"""
Application 계층 -- 오케스트레이션 + 서비스

Usage:
    from src.application.services.ordering_service import StatisticalOrderingService
"""
