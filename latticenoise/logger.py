"""
Logging configuration for the noise engine.

Provides a package-level main logger with console and optional file output,
a formatter with bracketed function names and multi-line support, and helpers
for attaching module loggers to the main handlers. Nothing is configured on
import: until setupMain() is called, only WARNING and above reach stderr
through the logging module's last-resort handler.


Functions
---------
**Setup Functions:**

    setupMain(fileName, fileFormat, fileLevel, outFormat, outLevel)
        Configure and return the main package logger.

**Logger Management:**

    addLog(name)
        Create module logger that uses main logger handlers.
    noneLog(name)
        Create logger with no handlers (warnings only).
    removeLog(name)
        Detach logger from handlers, closing unshared ones.

**Handler Management:**

    addMainHandlers(subLog)
        Add main logger handlers to module logger.
    removeHandlers(name)
        Remove all handlers from logger, closing unshared ones.
    closeHandler(handler)
        Close handler and update global variables.

**Custom Features:**

    CustomFormatter
        Format log records with bracketed function names and multi-line support.


Global Variables
----------------
log : logging.Logger
    Main package logger instance, None until setupMain() runs.
consoleHandler : logging.StreamHandler
    Shared console output handler.
fileHandler : logging.FileHandler
    Shared file output handler.
pending : list of str
    Names of module loggers created before the main logger existed.
"""

from typing import List, Optional
from datetime import datetime
import logging
import os

#-----------------------------------------------------------------------------#

# Logging levels
DEBUG = logging.DEBUG           # 10
INFO = logging.INFO             # 20
WARNING = logging.WARNING       # 30
ERROR = logging.ERROR           # 40
CRITICAL = logging.CRITICAL     # 50

# Log record component formats
DATETIME = '%(asctime)s'
NAME = '%(name)-10s'
LEVEL = '%(levelname)-7s'
FUNCTION = '%(funcName)s'
MESSAGE = '%(message)s'

# Delimiter strings
CS = ' : '      # Colon with spaces
P = '|'         # Pipe
RAB = '>'       # Right angle bracket
S = ' '         # Space

# Formatting strings
FMT_DATE = '%H:%M:%S'
FMT_OUT = NAME+CS+LEVEL+S+RAB+S+MESSAGE
FMT_FILE = P+DATETIME+P+S+NAME+S+LEVEL+S+FUNCTION+CS+MESSAGE

# Main logger name
MAIN_LOG = 'latticenoise'

# Global variables -----------------------------------------------------------#

# Main logger and main handlers
log = None
consoleHandler = None
fileHandler = None

# Loggers waiting on main handlers
pending:List[str] = []

###############################################################################

class CustomFormatter(logging.Formatter):
    """
    Log formatter with bracketed function names and multi-line support.

    Function names are wrapped in brackets and padded to a fixed width. When a
    message spans several lines, the record prefix is repeated at the start
    of every line so each line still reads as a complete log entry.


    Parameters
    ----------
    fmt : str, optional
        Log record format string.
    datefmt : str, optional
        Date/time format string.
    """

    def format(self, record:logging.LogRecord)->str:
        """Apply bracketed function name and per-line prefixes."""

        if (not record.funcName.startswith("[")):
            func = f"[{record.funcName}]"
            record.funcName = f"{func:22}"

        message = record.getMessage()
        if ('\n' in message):
            # Work on a copy so other handlers see the original record
            record = logging.makeLogRecord(record.__dict__)
            prefixFmt, _, _ = self._fmt.partition(MESSAGE)
            if (DATETIME in prefixFmt):
                record.asctime = self.formatTime(record, self.datefmt)
            prefix = prefixFmt % record.__dict__
            record.msg = ('\n' + prefix).join(message.split('\n'))
            record.args = None

        return super().format(record)

###############################################################################

def addMainHandlers(subLog:logging.Logger)->None:
    """
    Add main logger handlers (console, file) to a module logger.


    Parameters
    ----------
    subLog : logging.Logger
        Logger to receive main handlers.


    Notes
    -----
    Only handlers that exist (not None) are added, and never twice.
    """

    for handler in (consoleHandler, fileHandler):
        if ((handler is not None) and (handler not in subLog.handlers)):
            subLog.addHandler(handler)
    subLog.debug('%s logger activated', subLog.name)

###############################################################################

def setupMain(fileName:Optional[str] = None,
              fileFormat:Optional[str] = FMT_FILE,
              fileLevel:int = DEBUG,
              outFormat:Optional[str] = FMT_OUT,
              outLevel:int = INFO,
              )->logging.Logger:
    """
    Configure and return the main package logger.


    Parameters
    ----------
    fileName : str, optional
        Log file path. If None (default), file output is disabled.
    fileFormat : str, optional
        Format string for file handler. If None, file output disabled.
    fileLevel : int, default=DEBUG
        Minimum log level for file handler.
    outFormat : str, optional
        Format string for console handler. If None, console output disabled.
    outLevel : int, default=INFO
        Minimum log level for console handler.


    Returns
    -------
    log : logging.Logger
        Main logger instance with configured handlers.


    Notes
    -----
    - Calling again after the main logger exists returns it unchanged.
    - Module loggers registered through addLog() before this call receive the
      main handlers here.
    """

    global log, consoleHandler, fileHandler

    if (log is None):

        log = logging.getLogger(MAIN_LOG)
        log.setLevel(DEBUG)
        log.propagate = False

        # Console handler
        if (outFormat is not None):
            if (consoleHandler is None):
                consoleHandler = logging.StreamHandler()
                consoleHandler.set_name('Console handler')
                consoleHandler.setLevel(outLevel)
                consoleHandler.setFormatter(CustomFormatter(outFormat))
            log.addHandler(consoleHandler)
            log.debug('Console logging started')

        # File handler
        if ((fileName is not None) and (fileFormat is not None)):
            if (fileHandler is None):
                fileHandler = logging.FileHandler(fileName)
                fileHandler.set_name('File handler')
                fileHandler.setLevel(fileLevel)
                fileHandler.setFormatter(CustomFormatter(fileFormat,
                                                         FMT_DATE))
            log.addHandler(fileHandler)
            start = datetime.now().strftime("%m/%d/%Y %H:%M:%S")
            log.info('File logging started at %s in %s',
                     start, os.path.basename(fileName))

        # Hand main handlers to loggers created before setup
        while pending:
            addMainHandlers(logging.getLogger(pending.pop()))

    return log

###############################################################################

def addLog(name:str)->logging.Logger:
    """
    Create module logger that shares main logger handlers.


    Parameters
    ----------
    name : str
        Logger name, placed under the main logger namespace.


    Returns
    -------
    logger : logging.Logger
        New or existing logger named 'latticenoise.<name>'.


    Notes
    -----
    - If the main logger is not yet set up, the logger is queued and receives
      handlers when setupMain() runs.
    - Module loggers do not propagate, so records are emitted once.
    """

    fullName = f"{MAIN_LOG}.{name}"

    thisLog = logging.getLogger(fullName)
    thisLog.setLevel(DEBUG)
    thisLog.propagate = False

    if (log is None):
        if (fullName not in pending):
            pending.append(fullName)
    else:
        addMainHandlers(thisLog)

    return thisLog

###############################################################################

def noneLog(name:str)->logging.Logger:
    """
    Create or configure logger with no handlers.


    Parameters
    ----------
    name : str
        Full logger name.


    Returns
    -------
    logger : logging.Logger
        Logger with no handlers and level WARNING.
    """

    thisLog = logging.getLogger(name)
    thisLog.setLevel(WARNING)
    if (thisLog.handlers):
        removeHandlers(name)
    return thisLog

###############################################################################

def closeHandler(handler:logging.Handler)->None:
    """
    Close handler and clear the matching global handler variable.


    Parameters
    ----------
    handler : logging.Handler
        Handler to close.
    """

    global consoleHandler, fileHandler

    handler.close()
    if (handler is consoleHandler):
        consoleHandler = None
    elif (handler is fileHandler):
        fileHandler = None

###############################################################################

def removeHandlers(name:str)->None:
    """
    Remove all handlers from logger, closing those no other logger uses.


    Parameters
    ----------
    name : str
        Full logger name.
    """

    thisLog = logging.getLogger(name)

    while thisLog.handlers:
        handler = thisLog.handlers[0]
        thisLog.removeHandler(handler)

        shared = any(
            (isinstance(other, logging.Logger) and (handler in other.handlers))
            for other in logging.Logger.manager.loggerDict.values()
        )
        if (not shared):
            closeHandler(handler)

###############################################################################

def removeLog(name:str)->None:
    """
    Detach logger from its handlers, closing those no other logger uses.


    Parameters
    ----------
    name : str
        Full logger name.


    Notes
    -----
    - The logger stays registered, so module-level references to it remain
      valid and addLog() can attach handlers to it again.
    - Removing the main logger resets it and queues every module logger
      under it, so a later setupMain() reattaches them all.
    """

    global log

    thisLog = logging.getLogger(name)
    if ((log is not None) and (thisLog is log)):
        prefix = f"{MAIN_LOG}."
        for subName, subLog in list(logging.Logger.manager.loggerDict.items()):
            if (subName.startswith(prefix)
                and isinstance(subLog, logging.Logger)):
                removeHandlers(subName)
                if (subName not in pending):
                    pending.append(subName)
        log = None

    removeHandlers(name)
    if (name in pending):
        pending.remove(name)
