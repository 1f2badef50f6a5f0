STATS_SUCCESS = 'STATS_SUCCESS'
