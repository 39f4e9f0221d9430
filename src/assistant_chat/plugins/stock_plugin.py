"""Stock lookup tools answered locally while a run waits on tool outputs."""

STOCKS = [
    {"symbol": "AAPL", "price": 150, "delta": 2.00},
    {"symbol": "GOOGL", "price": 2500, "delta": -10.00},
    {"symbol": "TSLA", "price": 700, "delta": 5.00},
]


class StockPlugin:
    """Plugin providing the stock tools the hosted assistant is configured with."""

    def list_stocks(self) -> list:
        """List the stocks that are currently trending."""
        return [dict(stock) for stock in STOCKS]

    def show_stock_price(self, symbol: str) -> str:
        """Show the price of a given stock."""
        return symbol

    def show_stock_purchase(self, symbol: str) -> str:
        """Show the UI to purchase a stock."""
        return symbol

    def get_events(self) -> str:
        """List funny imaginary events between user-highlighted dates that describe stock activity."""
        return "news"

    def hook_provide_tools(self):
        """Return tools this plugin provides, keyed by the function name the assistant calls."""
        return {
            "listStocks": self.list_stocks,
            "showStockPrice": self.show_stock_price,
            "showStockPurchase": self.show_stock_purchase,
            "getEvents": self.get_events,
        }
