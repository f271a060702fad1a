from aiogram import Router


main_router = Router()
router_quiz = Router()
router_leaderboard = Router()
router_custom_questions = Router()
