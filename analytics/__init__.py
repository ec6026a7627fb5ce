"""
analytics: Business logic for price forecasting.

Sub-packages
------------
    analytics.forecasting   Moving-average, trend/seasonality and
                            momentum/volatility forecasters.
"""
