class RPCMethod:
    net_version = "net_version"
    net_listening = "net_listening"
    net_peerCount = "net_peerCount"

    mc_protocolVersion = "mc_protocolVersion"
    mc_syncing = "mc_syncing"
    mc_coinbase = "mc_coinbase"
    mc_mining = "mc_mining"
    mc_hashrate = "mc_hashrate"
    mc_gasPrice = "mc_gasPrice"
    mc_accounts = "mc_accounts"
    mc_blockNumber = "mc_blockNumber"

    mc_getBalance = "mc_getBalance"
    mc_getStorageAt = "mc_getStorageAt"
    mc_getTransactionCount = "mc_getTransactionCount"
    mc_getBlockTransactionCountByHash = "mc_getBlockTransactionCountByHash"
    mc_getBlockTransactionCountByNumber = "mc_getBlockTransactionCountByNumber"
    mc_getUncleCountByBlockHash = "mc_getUncleCountByBlockHash"
    mc_getUncleCountByBlockNumber = "mc_getUncleCountByBlockNumber"
    mc_getCode = "mc_getCode"

    mc_sign = "mc_sign"
    mc_sendTransaction = "mc_sendTransaction"
    mc_sendRawTransaction = "mc_sendRawTransaction"
    mc_call = "mc_call"
    mc_estimateGas = "mc_estimateGas"

    mc_getBlockByHash = "mc_getBlockByHash"
    mc_getBlockByNumber = "mc_getBlockByNumber"
    mc_getTransactionByHash = "mc_getTransactionByHash"
    mc_getTransactionByBlockHashAndIndex = "mc_getTransactionByBlockHashAndIndex"
    mc_getTransactionByBlockNumberAndIndex = "mc_getTransactionByBlockNumberAndIndex"
    mc_getTransactionReceipt = "mc_getTransactionReceipt"
    mc_getUncleByBlockHashAndIndex = "mc_getUncleByBlockHashAndIndex"
    mc_getUncleByBlockNumberAndIndex = "mc_getUncleByBlockNumberAndIndex"

    mc_getCompilers = "mc_getCompilers"

    mc_newFilter = "mc_newFilter"
    mc_newBlockFilter = "mc_newBlockFilter"
    mc_newPendingTransactionFilter = "mc_newPendingTransactionFilter"
    mc_uninstallFilter = "mc_uninstallFilter"
    mc_getFilterChanges = "mc_getFilterChanges"
    mc_getFilterLogs = "mc_getFilterLogs"
    mc_getLogs = "mc_getLogs"

    mc_getWork = "mc_getWork"
    mc_submitWork = "mc_submitWork"
    mc_submitHashrate = "mc_submitHashrate"
