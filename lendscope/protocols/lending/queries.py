"""GraphQL queries for the lending pool market indexer."""


class LendingQueries:
    """GraphQL query definitions for the lending pool indexer."""

    # Raw on-chain state of a single market in a pool
    MARKET_QUERY = """
    query GetMarket($network: String!, $poolId: String!, $marketId: String!) {
        market(network: $network, poolId: $poolId, marketId: $marketId) {
            marketId
            paused
            maxTotalDeposits
            maxTotalBorrows
            liquidationBonus
            collateralFactor
            liquidationThreshold
            reserveFactor
            borrowRate
            slope
            totalScaledDeposits
            totalScaledBorrows
            lastUpdateTime
            price
            closeFactor
            token {
                symbol
                name
                decimals
            }
        }
    }
    """
