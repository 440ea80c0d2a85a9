"""Tree-walking evaluator for minipas. evaluate reduces one syntax tree node to a runtime value in a given environment.

Nothing here raises for a bad program: runtime problems become objects.Error values, and every site that evaluates a
sub-node checks for an error or a pending return value and hands it back unchanged before doing anything else, so a
return reached inside an expression still leaves the procedure. Both stop the rest of the enclosing block.
"""

from minipas import numerical
from minipas.lang import objects
from minipas.syntax import tree


def new_error(message):
    return objects.Error(message)


def evaluate(node, env):
    """Returns the value of node in env, or None for nodes that produce no value (declarations, assignments)."""
    if isinstance(node, tree.Program):
        return evaluate_program(node.statements, env)

    elif isinstance(node, tree.ExpressionStatement):
        return evaluate(node.expression, env)

    elif isinstance(node, tree.BlockStatement):
        return evaluate_block(node.statements, env)

    elif isinstance(node, tree.ConstStatement):
        return evaluate_declaration(node, env, constant=True)

    elif isinstance(node, tree.VarStatement):
        return evaluate_declaration(node, env, constant=False)

    elif isinstance(node, tree.AssignStatement):
        return evaluate_assignment(node, env)

    elif isinstance(node, tree.ReturnStatement):
        value = evaluate(node.value, env)
        if objects.is_control(value):
            return value
        return objects.ReturnValue(value)

    elif isinstance(node, tree.IntegerLiteral):
        return objects.Integer(node.value)

    elif isinstance(node, tree.RealLiteral):
        return objects.Real(node.value)

    elif isinstance(node, tree.StringLiteral):
        return objects.String(node.value)

    elif isinstance(node, tree.BooleanLiteral):
        return objects.from_bool(node.value)

    elif isinstance(node, tree.Identifier):
        return evaluate_identifier(node, env)

    elif isinstance(node, tree.PrefixExpression):
        right = evaluate(node.right, env)
        if objects.is_control(right):
            return right
        return evaluate_prefix_expression(node.operator, right)

    elif isinstance(node, tree.InfixExpression):
        left = evaluate(node.left, env)
        if objects.is_control(left):
            return left

        right = evaluate(node.right, env)
        if objects.is_control(right):
            return right
        return evaluate_infix_expression(node.operator, left, right)

    elif isinstance(node, tree.ConditionalExpression):
        return evaluate_conditional_expression(node, env)

    elif isinstance(node, tree.ProcedureLiteral):
        return evaluate_procedure_literal(node, env)

    elif isinstance(node, tree.CallExpression):
        return evaluate_call_expression(node, env)

    return None


def evaluate_program(statements, env):
    """Evaluates top-level statements in order. A return value is unwrapped to its inner value."""
    result = None

    for statement in statements:
        result = evaluate(statement, env)

        if isinstance(result, objects.ReturnValue):
            return result.value
        elif isinstance(result, objects.Error):
            return result

    return result


def evaluate_block(statements, env):
    """Like evaluate_program, but a return value is passed up still wrapped so enclosing blocks stop too."""
    result = None

    for statement in statements:
        result = evaluate(statement, env)

        if isinstance(result, (objects.ReturnValue, objects.Error)):
            return result

    return result


def evaluate_declaration(node, env, constant):
    """Binds a var/const declaration in env. Declared types are recorded in the tree but not enforced."""
    value = evaluate(node.value, env)
    if objects.is_control(value):
        return value

    if not env.declare(node.name.value, value, constant=constant):
        return new_error(f"cannot redeclare constant: {node.name.value}")
    return None


def evaluate_assignment(node, env):
    value = evaluate(node.value, env)
    if objects.is_control(value):
        return value

    name = node.name.value
    if name not in env:
        return new_error(f"identifier not found: {name}")
    elif env.is_constant(name):
        return new_error(f"cannot assign to constant: {name}")

    env.assign(name, value)
    return None


def evaluate_identifier(node, env):
    value = env.get(node.value)
    if value is None:
        return new_error(f"identifier not found: {node.value}")
    return value


def evaluate_prefix_expression(operator, right):
    if operator == "not":
        return evaluate_not_operator_expression(right)
    elif operator == "-":
        return evaluate_minus_prefix_operator_expression(right)
    return new_error(f"unknown operator: {operator}{right.type}")


def evaluate_not_operator_expression(right):
    """Logical negation of truthiness: not false and not null are true, not of anything else is false."""
    return objects.from_bool(not objects.is_truthy(right))


def evaluate_minus_prefix_operator_expression(right):
    if isinstance(right, objects.Integer):
        return objects.Integer(numerical.wrap(-right.value))
    elif isinstance(right, objects.Real):
        return objects.Real(-right.value)
    return new_error(f"unknown operator: -{right.type}")


def evaluate_infix_expression(operator, left, right):
    numeric = (objects.Integer, objects.Real)

    if isinstance(left, objects.Integer) and isinstance(right, objects.Integer):
        return evaluate_integer_infix_expression(operator, left, right)
    elif isinstance(left, numeric) and isinstance(right, numeric):
        return evaluate_real_infix_expression(operator, left, right)
    elif isinstance(left, objects.String) and isinstance(right, objects.String) and operator == "+":
        return objects.String(left.value + right.value)
    elif operator == "==":
        return objects.from_bool(left.equals(right))
    elif operator == "<>":
        return objects.from_bool(not left.equals(right))
    elif left.type != right.type:
        return new_error(f"type mismatch: {left.type} {operator} {right.type}")
    return new_error(f"unknown operator: {left.type} {operator} {right.type}")


def evaluate_integer_infix_expression(operator, left, right):
    left_value = left.value
    right_value = right.value

    if operator == "+":
        return objects.Integer(numerical.wrap(left_value + right_value))
    elif operator == "-":
        return objects.Integer(numerical.wrap(left_value - right_value))
    elif operator == "*":
        return objects.Integer(numerical.wrap(left_value * right_value))
    elif operator == "/":
        if right_value == 0:
            return new_error("division by zero")
        return objects.Integer(numerical.truncated_div(left_value, right_value))

    return compare(operator, left, right)


def evaluate_real_infix_expression(operator, left, right):
    """Any arithmetic involving a real is done in floating point."""
    left_value = float(left.value)
    right_value = float(right.value)

    if operator == "+":
        return objects.Real(left_value + right_value)
    elif operator == "-":
        return objects.Real(left_value - right_value)
    elif operator == "*":
        return objects.Real(left_value * right_value)
    elif operator == "/":
        if right_value == 0:
            return new_error("division by zero")
        return objects.Real(left_value / right_value)

    return compare(operator, left, right)


def compare(operator, left, right):
    """Ordering and equality for two numbers."""
    if operator == "<":
        return objects.from_bool(left.value < right.value)
    elif operator == ">":
        return objects.from_bool(left.value > right.value)
    elif operator == "<=":
        return objects.from_bool(left.value <= right.value)
    elif operator == ">=":
        return objects.from_bool(left.value >= right.value)
    elif operator == "==":
        return objects.from_bool(left.value == right.value)
    elif operator == "<>":
        return objects.from_bool(left.value != right.value)
    return new_error(f"unknown operator: {left.type} {operator} {right.type}")


def evaluate_conditional_expression(node, env):
    """Evaluates the branch chosen by the condition's truthiness. A false condition with no else gives null."""
    condition = evaluate(node.condition, env)
    if objects.is_control(condition):
        return condition

    if objects.is_truthy(condition):
        branch = node.consequence
    elif node.alternative is not None:
        branch = node.alternative
    else:
        return objects.NULL

    result = evaluate(branch, env)
    return result if result is not None else objects.NULL


def evaluate_procedure_literal(node, env):
    """Creates a closure over env and binds it under the procedure's name."""
    procedure = objects.Procedure(node, env)

    if not env.declare(node.name, procedure):
        return new_error(f"cannot redeclare constant: {node.name}")
    return procedure


def evaluate_call_expression(node, env):
    procedure = evaluate(node.procedure, env)
    if objects.is_control(procedure):
        return procedure

    arguments = []
    for argument in node.arguments:
        value = evaluate(argument, env)
        if objects.is_control(value):
            return value
        arguments.append(value)

    return apply_procedure(procedure, arguments)


def apply_procedure(procedure, arguments):
    """Runs procedure's body in a fresh child of its defining environment with the parameters bound to arguments."""
    if not isinstance(procedure, objects.Procedure):
        return new_error(f"not a procedure: {procedure.type}")

    parameters = procedure.parameters
    if len(parameters) != len(arguments):
        return new_error(f"wrong number of arguments: want={len(parameters)}, got={len(arguments)}")

    call_env = procedure.env.enclosed()
    for parameter, argument in zip(parameters, arguments):
        call_env.declare(parameter.value, argument)

    try:
        result = evaluate(procedure.body, call_env)
    except RecursionError:
        return new_error(f"maximum recursion depth exceeded in procedure '{procedure.name}'")

    if isinstance(result, objects.ReturnValue):
        return result.value
    elif result is None:
        return objects.NULL
    return result
