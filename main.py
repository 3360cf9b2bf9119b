import time
from itertools import count
from typing import Annotated, Optional

import uvicorn
from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field

from calculator import INT32_MAX, INT32_MIN, CalculationError, Calculator, Operation
from config import HOST, PORT
from history import CalculationHistory, Flavor
from logger import get_logger_level, set_logger_level, independent_logger, request_logger, stack_logger
from operand_stack import OperandStack

ERROR_MESSAGES = {
    CalculationError.NOT_ENOUGH_ARGUMENTS: "Error: Not enough arguments to perform the operation {operation}",
    CalculationError.TOO_MANY_ARGUMENTS: "Error: Too many arguments to perform the operation {operation}",
    CalculationError.DIVIDE_BY_ZERO: "Error while performing operation Divide: division by 0",
    CalculationError.NEGATIVE_FACTORIAL_NOT_SUPPORTED:
        "Error while performing operation Factorial: not supported for the negative number",
}


# arguments are machine ints
Argument = Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]


class IndependentCalcInput(BaseModel):
    arguments: Optional[list[Argument]] = None
    operation: Optional[str] = None


class StackInput(BaseModel):
    arguments: Optional[list[Argument]] = None


def error_message(error: CalculationError, operation: str) -> str:
    return ERROR_MESSAGES[error].format(operation=operation)


def conflict(message: str) -> JSONResponse:
    return JSONResponse(content={"errorMessage": message}, status_code=409)


def get_calculator(request: Request) -> Calculator:
    return request.app.state.calculator


def get_stack(request: Request) -> OperandStack:
    return request.app.state.stack


def get_history(request: Request) -> CalculationHistory:
    return request.app.state.history


def create_app(stack: Optional[OperandStack] = None, history: Optional[CalculationHistory] = None) -> FastAPI:
    """
    Build the calculator server.
    :param stack: operand stack shared by the stack endpoints, a new empty one if not given
    :param history: calculation history, a new empty one if not given
    :return: the FastAPI application.
    """
    app = FastAPI(title="Calculator")
    app.state.calculator = Calculator()
    app.state.stack = stack if stack is not None else OperandStack()
    app.state.history = history if history is not None else CalculationHistory()
    app.state.request_counter = count(1)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_number = next(request.app.state.request_counter)
        start_time = time.time()
        request.state.request_number = request_number

        request_logger.info(
            f"Incoming request | #{request_number} | resource: {request.url.path} | HTTP Verb {request.method}",
            extra={"request_number": request_number}
        )

        response = await call_next(request)

        duration_ms = int((time.time() - start_time) * 1000)
        request_logger.debug(
            f"request #{request_number} duration: {duration_ms}ms",
            extra={"request_number": request_number}
        )

        return response

    @app.get("/calculator/health", response_class=PlainTextResponse)
    def health():
        return "OK"

    @app.post("/calculator/independent/calculate")
    def independent_calculate(request: Request, data: Optional[IndependentCalcInput] = None,
                              calculator: Calculator = Depends(get_calculator),
                              history: CalculationHistory = Depends(get_history)):
        request_number = request.state.request_number
        if data is None:
            data = IndependentCalcInput()
        operation = Operation.from_name(data.operation)
        if operation is None:
            message = f"Error: unknown operation: {data.operation or ''}"
            independent_logger.error(f"Server encountered an error ! message: {message}",
                                     extra={"request_number": request_number})
            return conflict(message)

        arguments = data.arguments or []
        is_success, result = calculator.calculate(operation, arguments)
        if not is_success:
            message = error_message(result, data.operation)
            independent_logger.error(f"Server encountered an error ! message: {message}",
                                     extra={"request_number": request_number})
            return conflict(message)

        history.add(Flavor.INDEPENDENT, operation, arguments, result)
        independent_logger.info(
            f"Performing operation {operation.display_name}. Result is {result}",
            extra={"request_number": request_number}
        )
        independent_logger.debug(
            f"Performing operation: {operation.display_name}({','.join(map(str, arguments))}) = {result}",
            extra={"request_number": request_number}
        )
        return {"result": result}

    @app.get("/calculator/stack/size")
    def stack_size(request: Request, stack: OperandStack = Depends(get_stack)):
        request_number = request.state.request_number
        content = stack.snapshot()

        stack_logger.info(f"Stack size is {len(content)}", extra={"request_number": request_number})
        stack_logger.debug(f"Stack content (first == top): [{', '.join(map(str, content))}]",
                           extra={"request_number": request_number})
        return {"result": len(content)}

    @app.put("/calculator/stack/arguments")
    def add_to_stack(data: StackInput, request: Request, stack: OperandStack = Depends(get_stack)):
        request_number = request.state.request_number
        if data.arguments is None:
            return JSONResponse(content={"errorMessage": "A list of arguments is required in request body"},
                                status_code=400)

        size_after = stack.push(data.arguments)

        stack_logger.info(
            f"Adding total of {len(data.arguments)} argument(s) to the stack | Stack size: {size_after}",
            extra={"request_number": request_number})
        stack_logger.debug(
            f"Adding arguments: {','.join(map(str, data.arguments))} | Stack size before "
            f"{size_after - len(data.arguments)} | stack size after {size_after}",
            extra={"request_number": request_number})

        return {"result": size_after}

    @app.api_route("/calculator/stack/operate", methods=["GET", "PUT"])
    def stack_operate(request: Request, operation_name: Optional[str] = Query(None, alias="operation"),
                      calculator: Calculator = Depends(get_calculator),
                      stack: OperandStack = Depends(get_stack),
                      history: CalculationHistory = Depends(get_history)):
        request_number = request.state.request_number
        operation = Operation.from_name(operation_name)
        if operation is None:
            message = f"Error: unknown operation: {operation_name or ''}"
            stack_logger.error(f"Server encountered an error ! message: {message}",
                               extra={"request_number": request_number})
            return conflict(message)

        stack_count = stack.size()
        required = calculator.required_argument_count(operation)
        is_popped, arguments = stack.try_pop(required)
        if not is_popped:
            message = (f"Error: cannot implement operation {operation.display_name}. It requires {required} "
                       f"arguments and the stack has only {stack_count} arguments")
            stack_logger.error(f"Server encountered an error ! message: {message}",
                               extra={"request_number": request_number})
            return conflict(message)

        # popped arguments are consumed even when the calculation fails
        is_success, result = calculator.calculate(operation, arguments)
        if not is_success:
            message = error_message(result, operation_name)
            stack_logger.error(f"Server encountered an error ! message: {message}",
                               extra={"request_number": request_number})
            return conflict(message)

        history.add(Flavor.STACK, operation, arguments, result)
        stack_logger.info(
            f"Performing operation {operation.display_name}. Result is {result} | stack size: {stack.size()}",
            extra={"request_number": request_number}
        )
        stack_logger.debug(
            f"Performing operation: {operation.display_name}({','.join(map(str, arguments))}) = {result}",
            extra={"request_number": request_number}
        )
        return {"result": result}

    @app.delete("/calculator/stack/arguments")
    def delete_from_stack(request: Request, num_to_delete: int = Query(..., alias="count"),
                          stack: OperandStack = Depends(get_stack)):
        request_number = request.state.request_number
        stack_count = stack.size()
        is_popped, _ = stack.try_pop(num_to_delete)
        if not is_popped:
            message = f"Error: cannot remove {num_to_delete} from the stack. It has only {stack_count} arguments"
            stack_logger.error(f"Server encountered an error ! message: {message}",
                               extra={"request_number": request_number})
            return conflict(message)

        size_after = stack.size()
        stack_logger.info(
            f"Removing total {num_to_delete} argument(s) from the stack | Stack size: {size_after}",
            extra={"request_number": request_number}
        )
        return {"result": size_after}

    @app.get("/calculator/history")
    def get_calculations(request: Request, flavor: Optional[str] = Query(None),
                         history: CalculationHistory = Depends(get_history)):
        request_number = request.state.request_number
        selected = Flavor.from_name(flavor)

        if selected is None or selected is Flavor.STACK:
            stack_logger.info(f"History: So far total {history.count(Flavor.STACK)} stack actions",
                              extra={"request_number": request_number})
        if selected is None or selected is Flavor.INDEPENDENT:
            independent_logger.info(
                f"History: So far total {history.count(Flavor.INDEPENDENT)} independent actions",
                extra={"request_number": request_number})

        return {"result": history.calculations(selected)}

    @app.get("/logs/level")
    def get_level(logger_name: str = Query(..., alias="logger-name")):
        level = get_logger_level(logger_name)
        if level is None:
            return JSONResponse(content="Logger not found", status_code=400)
        return level

    @app.put("/logs/level")
    def set_level(logger_name: str = Query(..., alias="logger-name"),
                  logger_level: str = Query(..., alias="logger-level")):
        success = set_logger_level(logger_name, logger_level)
        if not success:
            return JSONResponse(content="Invalid logger name or level", status_code=400)
        return logger_level.upper()

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=HOST, port=PORT)
