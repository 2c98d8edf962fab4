def make_logger(source_id, log_queue=None):
    """
    Build the `_log(message)` function used throughout a capture.

    Messages go to `log_queue` as {'id', 'msg'} dicts when a queue is given
    (batch workers report back to the parent this way), otherwise they are
    printed with the source id as prefix.
    """
    def _log(message):
        log_msg = {'id': source_id, 'msg': message}
        if log_queue and hasattr(log_queue, 'put'):
            log_queue.put(log_msg)
        else:
            print(f"[{log_msg['id']}] {log_msg['msg']}")
    return _log
